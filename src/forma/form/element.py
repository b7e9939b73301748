from collections.abc import Mapping
from datetime import date, datetime, time

from .composition import Node
from .params import Params


NON_INPUT_TAGS = ('select', 'textarea')
FALSY_STRINGS = ('', '0', 'false', 'off', 'no')


def format_value(value):
    if value is None:
        return None

    if isinstance(value, bool):
        return 'true' if value else 'false'

    if isinstance(value, (datetime, date, time)):
        return value.isoformat()

    return str(value)


def same_value(left, right):
    return format_value(left) == format_value(right)


def is_truthy(value):
    if isinstance(value, str):
        return value.strip().lower() not in FALSY_STRINGS

    return bool(value)


def read_value(source, name):
    ''' Params are read by field, mappings by key, any other object by attribute. '''
    if source is None:
        return None

    if isinstance(source, Params):
        return source.lookup(name)

    if isinstance(source, Mapping):
        return source.get(name)

    return getattr(source, name)


def html_id_for(scope, name):
    if not scope:
        return str(name)

    segments = [part for part in str(scope).replace(']', '[').split('[') if part]
    return '_'.join(segments + [str(name)])


class Element(Node):
    def __init__(self, name, definition, source, scope=None, owner=None):
        self.name = name
        self.definition = definition
        self.source = source
        self.scope = scope
        self.owner = owner
        self.html_name = f"{scope}[{name}]" if scope else name
        self.html_id = html_id_for(scope, name)
        self.errors_messages = self._errors_messages()
        self.tags = self._build_tags()

    def __repr__(self):
        return f"<{type(self).__name__} {self.html_name}>"

    def _build_tags(self):
        definition = self.definition
        tags = dict(definition.tags)
        tags['input'] = definition.input_type
        if definition.output is not None:
            tags['output'] = definition.output.type
        if definition.options:
            tags['options'] = True
        tags['errors'] = bool(self.errors_messages)
        return tags

    def _errors_messages(self):
        errors = getattr(self.source, 'errors', None) if not isinstance(self.source, Mapping) else None
        messages_for = getattr(errors, 'messages_for', None)
        if not callable(messages_for):
            return []

        return list(messages_for(self.name) or ())

    @property
    def input_type(self):
        return self.definition.input_type

    @property
    def options(self):
        return self.definition.options

    @property
    def detached(self):
        return self.definition.detached

    @property
    def disabled(self):
        return self.definition.disabled

    @property
    def readonly(self):
        return self.definition.readonly

    @property
    def is_input_tag(self):
        return self.input_type not in NON_INPUT_TAGS

    @property
    def value(self):
        return read_value(self.source, self.name)

    @property
    def html_value(self):
        if self.input_type == 'checkbox':
            return '1' if is_truthy(self.value) else '0'

        if self.detached:
            return self.definition.input.get('value')

        if not self.is_input_tag:
            return None

        return format_value(self.value)

    @property
    def html_checked(self):
        if self.input_type == 'checkbox':
            return is_truthy(self.value)

        if self.input_type == 'radio':
            return same_value(self.value, self.html_value)

        return None

    def input_html_attributes(self):
        attrs = {'type': self.input_type} if self.is_input_tag else {}
        attrs.update((key, value) for key, value in self.definition.input.attrs.items() if key != 'type')

        for key, value in (
            ('name', self.html_name),
            ('id', self.html_id),
            ('value', self.html_value),
            ('checked', self.html_checked),
            ('disabled', self.disabled),
            ('readonly', self.readonly),
        ):
            if attrs.get(key) is None or attrs.get(key) is False:
                attrs[key] = value

        return attrs

    @property
    def label_text(self):
        return self.definition.label.text or str(self.name).replace('_', ' ').capitalize()

    @property
    def label_display(self):
        return self.definition.label.display

    def label_html_attributes(self):
        return {'for': self.html_id, **self.definition.label.attrs}

