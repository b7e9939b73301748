''' Configurable level, formatter and output handlers for module loggers. '''
import logging
import platform
import sys
from logging import handlers
from typing import List, Optional

from forma.conf import ModuleConfig, default_config, getConfig


class NoConfigValue(Exception):
    pass


def getLoggerHandler(logspec: Optional[str] = None):
    if logspec is None or logspec == "stderr":
        return logging.StreamHandler(sys.stderr)

    if logspec == "stdout":
        return logging.StreamHandler(sys.stdout)

    if logspec.startswith("file://"):
        return logging.FileHandler(logspec[7:])

    if logspec.startswith("syslog://"):
        hostname, _, port = logspec[9:].partition(":")
        return handlers.SysLogHandler(
            address=(hostname or "localhost", int(port) if port else 514),
            facility=handlers.SysLogHandler.LOG_LOCAL0
        )

    raise ValueError("Cannot parse logging spec: %s" % logspec)


def __closure__():  # noqa: C901
    FORMA_LOGGERS = dict()

    def config_value(log_config, name):
        value = getattr(log_config, name, None)
        if isinstance(value, str):
            return value

        raise NoConfigValue("Invalid log config value: {} = {}".format(name, value))

    def setupLogger(module_name: Optional[str], log_config: ModuleConfig):
        module_logger = logging.getLogger(module_name)

        if log_config is None:
            return module_logger

        try:
            log_level = getattr(logging, config_value(log_config, "LOG_LEVEL").upper())
        except (NoConfigValue, AttributeError):
            log_level = logging.NOTSET

        module_logger.setLevel(log_level)

        outputs = getattr(log_config, "LOG_OUTPUT", None)
        if not isinstance(outputs, (list, tuple)):
            outputs = (outputs, )

        log_handlers: List[logging.Handler] = [getLoggerHandler(output) for output in outputs if output]

        try:
            log_formatter = config_value(log_config, "LOG_FORMATTER")
            log_datefmt = config_value(log_config, "LOG_DATEFMT")
        except NoConfigValue:
            pass
        else:
            formatter = log_formatter.format(hostname=platform.node().split(".")[0])
            for handler in log_handlers:
                handler.setFormatter(logging.Formatter(formatter, log_datefmt))

            if default_config.LOG_COLORED:
                import coloredlogs
                coloredlogs.install(fmt=formatter, level=log_level, logger=module_logger)

        # The root logger is configured through basicConfig
        if module_name is None:
            if log_handlers:
                logging.basicConfig(handlers=log_handlers)
        else:
            for handler in log_handlers:
                module_logger.addHandler(handler)

        FORMA_LOGGERS[module_name] = module_logger
        return module_logger

    def getLogger(module_name, log_config=None):
        if module_name in FORMA_LOGGERS:
            return FORMA_LOGGERS[module_name]

        return setupLogger(module_name, log_config or getConfig(module_name))

    return getLogger, setupLogger(None, default_config)


getLogger, default_logger = __closure__()
