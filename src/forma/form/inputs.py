"""
Input renderers, registered by input type. Any type without a dedicated
renderer (text, email, hidden, number, date, range, ...) is a plain input.
"""
from forma.helper import ClassRegistry

from .element import format_value, is_truthy, same_value
from .html import concat, tag


class InputRenderer(object):
    def render(self, element):
        raise NotImplementedError


InputRendererRegistry = ClassRegistry(InputRenderer)
register = InputRendererRegistry.register


def renderer_for(input_type):
    key = input_type if InputRendererRegistry.contains(input_type) else 'input'
    return InputRendererRegistry.construct(key)


@register('input')
class PlainInput(InputRenderer):
    def render(self, element):
        return tag('input', element.input_html_attributes())


@register('checkbox')
class CheckboxInput(InputRenderer):
    def render(self, element):
        if element.options:
            return self.render_group(element)

        hidden = tag('input', {
            'name': element.html_name,
            'type': 'hidden',
            'value': '0',
            'autocomplete': 'off',
        })
        checkbox = tag('input', {**element.input_html_attributes(), 'type': 'checkbox', 'value': '1'})
        return concat(hidden, checkbox)

    def render_group(self, element):
        selected = element.value
        if selected is None:
            selected = []
        elif isinstance(selected, (str, bytes)) or not hasattr(selected, '__iter__'):
            selected = [selected]

        selected = {format_value(item) for item in selected}
        parts = []
        for value, text in element.options:
            checkbox_id = f"{element.html_id}_{value}"
            parts.append(tag('input', {
                **element.input_html_attributes(),
                'value': value,
                'id': checkbox_id,
                'name': f"{element.html_name}[]",
                'checked': format_value(value) in selected,
            }))
            parts.append(tag('label', {**element.label_html_attributes(), 'for': checkbox_id}, text))

        return concat(*parts)


@register('radio')
class RadioInput(InputRenderer):
    def render(self, element):
        parts = []
        for value, text in element.options:
            parts.append(tag('label', {'for': element.html_id}, text))
            parts.append(tag('input', {
                **element.input_html_attributes(),
                'type': 'radio',
                'value': value,
                'checked': same_value(value, element.value),
            }))

        return concat(*parts)


@register('select')
class SelectInput(InputRenderer):
    def render(self, element):
        multiple = is_truthy(element.definition.input.get('multiple', False))
        current = element.value
        if multiple:
            values = current if isinstance(current, (list, tuple, set)) else ([] if current is None else [current])
            chosen = {format_value(item) for item in values}

        options = []
        for value, text in element.options:
            selected = format_value(value) in chosen if multiple else same_value(value, current)
            options.append(tag('option', {'value': value, 'selected': selected}, text))

        attrs = element.input_html_attributes()
        output = element.definition.output
        if multiple and output is not None and output.type == 'array':
            # each selected option is submitted under the same name
            attrs['name'] = f"{element.html_name}[]"

        return tag('select', attrs, options)


@register('textarea')
class TextareaInput(InputRenderer):
    def render(self, element):
        return tag('textarea', element.input_html_attributes(), format_value(element.value))
