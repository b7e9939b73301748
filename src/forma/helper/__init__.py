from .clsutil import hybridmethod
from .genutil import camel_to_lower, humanize, load_class
from .registry import ClassRegistry, BaseClassRegistry

__all__ = (
    'BaseClassRegistry',
    'ClassRegistry',
    'camel_to_lower',
    'humanize',
    'hybridmethod',
    'load_class',
)
