import importlib
import re

RX_CAMEL_BOUNDARY = re.compile(r'(?<!^)(?=[A-Z])')


def camel_to_lower(value, sep='_'):
    return RX_CAMEL_BOUNDARY.sub(sep, value).lower()


def humanize(key):
    ''' Rails style attribute humanization:
        "items_attributes[0].name" => "Items attributes[0] name"
        "maker_id" => "Maker"
    '''
    text = str(key).replace('.', '_').lstrip('_')
    if text.endswith('_id'):
        text = text[:-3]

    text = text.replace('_', ' ').strip().lower()
    return text[:1].upper() + text[1:]


def load_class(spec):
    ''' Load an object from a "package.module:Name" (or "package.module.Name") path. '''
    if ':' in spec:
        module_name, _, attr = spec.partition(':')
    else:
        module_name, _, attr = spec.rpartition('.')

    module = importlib.import_module(module_name)
    return getattr(module, attr)
