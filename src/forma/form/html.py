"""
Markup builder

    tag('input', {'type': 'text', 'name': 'q', 'required': True})
    => <input type="text" name="q" required>

Attributes keep their insertion order. `None` and `False` are omitted,
`True` is rendered as a bare attribute and everything else is escaped.
"""
from collections.abc import Mapping

from markupsafe import Markup, escape


VOID_ELEMENTS = frozenset((
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img',
    'input', 'link', 'meta', 'source', 'track', 'wbr',
))

EXPANDED_ATTRIBUTES = ('data', 'aria')


def attribute_name(key):
    key = str(key)
    if key.endswith('_'):
        key = key.rstrip('_')
    return key.replace('_', '-')


def _attribute(name, value):
    if value is None or value is False:
        return None

    if value is True:
        return Markup(' %s') % name

    if isinstance(value, (list, tuple)):
        value = ' '.join(str(item) for item in value if item)

    return Markup(' %s="%s"') % (name, value)


def attributes(attrs):
    parts = []
    for key, value in (attrs or {}).items():
        if key in EXPANDED_ATTRIBUTES and isinstance(value, Mapping):
            parts.extend(
                _attribute(f"{key}-{attribute_name(sub_key)}", sub_value)
                for sub_key, sub_value in value.items()
            )
            continue

        parts.append(_attribute(attribute_name(key), value))

    return Markup('').join(part for part in parts if part is not None)


def content(value):
    if value is None:
        return Markup('')

    if isinstance(value, (list, tuple)):
        return Markup('').join(content(item) for item in value)

    return escape(value)


def tag(name, attrs=None, body=None):
    opening = Markup('<%s%s>') % (name, attributes(attrs))
    if name in VOID_ELEMENTS:
        return opening

    return opening + content(body) + Markup('</%s>') % name


def concat(*parts):
    return Markup('').join(content(part) for part in parts)

