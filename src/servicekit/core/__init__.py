"""servicekit core: exceptions, logging and component contracts."""
