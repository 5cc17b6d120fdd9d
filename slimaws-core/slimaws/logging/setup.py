import logging
import sys
import warnings

from slimaws import config, constants

from .format import AddFormattedAttributes, AwsTraceLoggingFormatter, DefaultFormatter

# logger of the calls to AWS services
AWS_REQUEST_LOGGER = "slimaws.request.aws"

default_log_levels = {
    "botocore": logging.ERROR,
    "requests": logging.WARNING,
    "urllib3": logging.WARNING,
    "werkzeug": logging.WARNING,
    "slimaws.request": logging.INFO,
}

trace_log_levels = {
    "slimaws.aws.protocol.serializer": logging.DEBUG,
    "slimaws.request": logging.DEBUG,
}


def get_log_level_from_config():
    # overriding the log level if SLIMAWS_LOG has been set
    if config.SLIMAWS_LOG:
        log_level = str(config.SLIMAWS_LOG).upper()
        if log_level.lower() in constants.TRACE_LOG_LEVELS:
            log_level = "DEBUG"
        log_level = logging.getLevelName(log_level)
        return log_level

    return logging.DEBUG if config.DEBUG else logging.INFO


def setup_logging_from_config():
    log_level = get_log_level_from_config()
    setup_logging(log_level)

    if config.is_trace_logging_enabled():
        for name, level in trace_log_levels.items():
            logging.getLogger(name).setLevel(level)

    setup_request_trace_logging(config.is_trace_logging_enabled())


def setup_request_trace_logging(enabled: bool) -> None:
    """
    Attaches (or detaches) the handler which appends the input and the output of each call to the log lines of the
    AWS request logger. The traced lines are not propagated to the root handler.

    :param enabled: whether the calls should be traced
    """
    logger = logging.getLogger(AWS_REQUEST_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler.formatter, AwsTraceLoggingFormatter):
            logger.removeHandler(handler)

    logger.propagate = not enabled
    if enabled:
        handler = create_default_handler(logging.DEBUG)
        handler.setFormatter(AwsTraceLoggingFormatter())
        logger.addHandler(handler)


def create_default_handler(log_level: int):
    log_handler = logging.StreamHandler(stream=sys.stderr)
    log_handler.setLevel(log_level)
    log_handler.setFormatter(DefaultFormatter())
    log_handler.addFilter(AddFormattedAttributes())
    return log_handler


def setup_logging(log_level=logging.INFO) -> None:
    """
    Configures the python logging environment for applications using slimaws.

    :param log_level: the optional log level.
    """
    # set create a default handler for the root logger (basically logging.basicConfig but explicit)
    log_handler = create_default_handler(log_level)

    # replace any existing handlers
    logging.basicConfig(level=log_level, handlers=[log_handler], force=True)

    warnings.filterwarnings("ignore")
    logging.captureWarnings(True)

    # set log levels of loggers
    logging.root.setLevel(log_level)
    logging.getLogger("slimaws").setLevel(log_level)
    for logger, level in default_log_levels.items():
        logging.getLogger(logger).setLevel(level)
