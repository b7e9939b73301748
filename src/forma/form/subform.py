from .container import Container
from .datadef import SubformDefinition
from .dsl import Composite


class Subform(Container, Composite):
    ''' One nested object. Declared on its own to be reused:

        class AddressSubform(Subform):
            street = element('text', 'string')
            city = element('text', 'string')

        class CustomerForm(Form):
            address = subform(AddressSubform)
    '''

    def __init__(self, name, definition=None, source=None, scope=None, index=None, template=False, owner=None):
        if definition is None:
            definition = SubformDefinition(name=name, declarations=type(self).__declarations__)

        self.name = name
        self.definition = definition
        self.source = source
        self.scope = scope
        self.owner = owner
        self.tags = {'index': index, 'template': template}
        self.build_nodes(definition.declarations, source)

    def __repr__(self):
        return f"<{type(self).__name__} {self.scope}>"

    @classmethod
    def subform_class(cls):
        return Subform

    def element_tags(self):
        return {'subform': self.name}

    @property
    def index(self):
        return self.tags['index']

    @property
    def is_template(self):
        return self.tags['template']

    @property
    def html_id(self):
        return f"{self.name}_{self.index}"

    @property
    def html_class(self):
        return f"{self.name}_subform"

    @property
    def template_html_id(self):
        return f"{self.name}_template"
