import configparser
import json
import logging
import os
import re

from types import ModuleType
from typing import Any, Callable, Dict, Union

from . import sysdefaults


def env(name: str, defval: Any, coercer: Callable[[Any], Any] = None):
    ''' Read an environment variable to be used as a configuration value '''
    value = os.environ.get(name, defval)
    return coercer(value) if callable(coercer) else value


FORMA_SYSTEM_DEFAULTS = env("FORMA_SYSTEM_DEFAULTS", "sysdefaults")
FORMA_CONFIG_FILES = env("FORMA_CONFIG_FILE", "base.ini|config.ini").split('|')
DEBUG_ALL_CONFIG_VALUE = "#ALL"


def __module_config__():  # noqa: C901
    RX_INVALID_OPTION = re.compile(r"[^A-Za-z\d_]+")

    __parser__ = configparser.ConfigParser()
    __parser__.optionxform = lambda s: RX_INVALID_OPTION.sub("_", s.strip()).upper()

    __config__: Dict[str, "ModuleConfig"] = {}

    def coerce(section, key, default):
        # NOTE: bool is a subclass of int, it must be checked first.
        if isinstance(default, bool):
            return __parser__.getboolean(section, key)
        if isinstance(default, int):
            return __parser__.getint(section, key)
        if isinstance(default, float):
            return __parser__.getfloat(section, key)
        if isinstance(default, (dict, list, tuple)):
            return json.loads(__parser__.get(section, key))
        if isinstance(default, (str, type(None))):
            return __parser__.get(section, key)

        raise ValueError(f"Not supported config value type [{type(default)}].")

    class ModuleConfig(object):
        def __init__(self, module_name: str, *defaults):
            if module_name in __config__:
                raise RuntimeError(f"Module [{module_name}] already configured.")

            self.__name__ = module_name
            values: Dict[str, Any] = {}
            sources: Dict[str, Any] = {}

            def load(conf):
                if conf is None:
                    return

                if isinstance(conf, ModuleConfig):
                    items, trace = conf.items(), conf.__sources__
                else:
                    items, trace = conf.__dict__.items(), None

                for key, default in items:
                    if not key.isupper() or key in values:
                        continue

                    if __parser__.has_option(module_name, key):
                        values[key] = coerce(module_name, key, default)
                        sources[key] = (values[key], FORMA_CONFIG_FILES)
                        continue

                    values[key] = default
                    sources[key] = trace[key] if trace else (default, getattr(conf, '__name__', '<unknown>'))

            for conf in defaults + (sysdefaults,):
                load(conf)

            if sysdefaults.DEBUG_MODULE_CONFIG in (DEBUG_ALL_CONFIG_VALUE, module_name):
                logging.debug("=== START MODULE CONFIG [%s] ===", module_name)
                for key, (value, origin) in sources.items():
                    logging.debug(" - [%s] %r ::= %s", key, value, origin)
                logging.debug("=/=  END MODULE CONFIG [%s]  =/=", module_name)

            self.__values__ = values
            self.__sources__ = sources

        def __getattr__(self, name):
            if name.startswith('__'):
                raise AttributeError(name)

            try:
                return self.__values__[name]
            except KeyError:
                raise AttributeError(f"Config [{self.__name__}] has no value [{name}]") from None

        def __getitem__(self, name):
            return self.__values__[name]

        def get(self, name, default=None):
            return self.__values__.get(name, default)

        def items(self):
            ''' Only UPPERCASE keys declared in a defaults module are listed. '''
            yield from self.__values__.items()

        def keys(self):
            yield from self.__values__.keys()

        def as_dict(self):
            return self.__values__.copy()

    def get_config(config_key: str, *defaults: Union[ModuleType, ModuleConfig]) -> ModuleConfig:
        if config_key not in __config__:
            __config__[config_key] = ModuleConfig(config_key, *defaults)

        return __config__[config_key]

    # Missing files are ignored, so a list of candidate locations can be given.
    __parser__.read(FORMA_CONFIG_FILES)
    default_config = get_config(FORMA_SYSTEM_DEFAULTS, sysdefaults)
    return ModuleConfig, get_config, default_config


ModuleConfig, getConfig, default_config = __module_config__()
