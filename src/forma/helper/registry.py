from pyrsistent import pmap

from forma import logger
from forma.error import BadRequestError, NotFoundError

from .genutil import camel_to_lower


class BaseClassRegistry(object):
    pass


def ClassRegistry(base_class, post_register=None):  # noqa: C901
    ''' The register function covers 3 cases:
        - empty decorator. E.g. @register
        - decorator without explicit key (i.e. key is None). E.g. @register()
        - decorator with key provided. E.g. @register('class-key')
    '''

    lookup_table = dict()
    registry_hist = list()
    registry_name = base_class.__name__

    def _register(key=None, **kwargs):
        def _decorator(cls):
            _key = camel_to_lower(cls.__name__) if key is None else key
            exist_key = cls.__dict__.get('__clsid__')

            if exist_key is not None and exist_key != _key:
                raise BadRequestError(
                    "H00.301",
                    f"Register a class with a different key is not allowed [__clsid__ = {exist_key}] != [{_key}]"
                )

            if _key in lookup_table:
                raise BadRequestError(
                    "H00.302",
                    f"Key [{_key}] already registered in registry [{registry_name}]"
                )

            if not issubclass(cls, base_class):
                raise BadRequestError(
                    "H00.303",
                    f"Registering class [{cls.__name__}] must be a subclass of [{registry_name}]"
                )

            cls.__clsid__ = _key
            lookup_table[_key] = cls
            registry_hist.append((cls, _key, kwargs))

            logger.debug('Registered %s [%s => %s]', registry_name, _key, cls.__name__)

            if post_register is None:
                return cls

            if modified_cls := post_register(cls, _key, **kwargs):
                lookup_table[_key] = modified_cls
                return modified_cls

            return cls

        if isinstance(key, type):
            cls, key = key, None
            return _decorator(cls)

        return _decorator

    def _get_item(key_or_class):
        try:
            return lookup_table[key_or_class]
        except (KeyError, TypeError):
            if isinstance(key_or_class, type) and issubclass(key_or_class, base_class):
                key = key_or_class.__dict__.get('__clsid__')
                if key and lookup_table.get(key) is key_or_class:
                    return key_or_class

        raise NotFoundError(
            "H00.401",
            f"Registry item [{key_or_class}] not found in registry [{registry_name}]"
        )

    def _contains(key):
        return key in lookup_table

    def _unregister(key):
        cls = lookup_table.pop(key)
        del cls.__clsid__
        return cls

    def _get_registry():
        return pmap(lookup_table)

    def _construct(key, *args, **kwargs):
        return _get_item(key)(*args, **kwargs)

    return type(f"{registry_name}Registry", (BaseClassRegistry,), dict(
        base_class=base_class,
        construct=staticmethod(_construct),
        contains=staticmethod(_contains),
        get=staticmethod(_get_item),
        get_registry=staticmethod(_get_registry),
        get_history=staticmethod(lambda: tuple(registry_hist)),
        register=staticmethod(_register),
        unregister=staticmethod(_unregister),
        keys=staticmethod(lambda: tuple(lookup_table.keys())),
        values=staticmethod(lambda: tuple(lookup_table.values())),
        items=staticmethod(lambda: tuple(lookup_table.items())),
    ))
