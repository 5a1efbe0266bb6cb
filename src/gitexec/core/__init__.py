"""gitexec core components.

- config: ``GitExecConfig`` pydantic model (YAML loadable)
- constants: timeouts, exit codes and environment variable names
- errors: ``ErrorKind`` taxonomy, pattern table, classifier and exceptions
- logging: structlog configuration and component loggers
"""
