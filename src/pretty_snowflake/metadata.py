PROJECT_NAME = "pretty-snowflake"
__version__ = "0.1.0"
