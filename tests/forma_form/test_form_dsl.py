import pytest

from forma.error import DefinitionError
from forma.form import (
    CollectionDefinition,
    ElementDefinition,
    Form,
    Subform,
    SubformDefinition,
    element,
    many,
    subform,
)
from forma_test.sample_forms import CustomerSubform, ItemSubform, OrderForm


def test_declarations_keep_order():
    assert list(OrderForm.__declarations__) == ['name', 'customer', 'items']
    assert list(ItemSubform.__declarations__) == ['name', 'quantity', 'price']

    name = OrderForm.__declarations__['name']
    assert isinstance(name, ElementDefinition)
    assert name.name == 'name'
    assert name.input_type == 'text'
    assert name.output.type == 'string'

    customer = OrderForm.__declarations__['customer']
    assert isinstance(customer, SubformDefinition)
    assert customer.node_class is CustomerSubform
    assert list(customer.declarations) == ['name']

    items = OrderForm.__declarations__['items']
    assert isinstance(items, CollectionDefinition)
    assert items.subform.name == 'items'
    assert items.subform.node_class is ItemSubform


def test_definition_attributes_are_collected():
    class NoteForm(Form):
        title = element('text', 'string')

    assert not hasattr(NoteForm, 'title')
    assert list(NoteForm.__declarations__) == ['title']


def test_subclass_extends_a_copy():
    class BaseForm(Form):
        name = element('text', 'string')

    class ExtendedForm(BaseForm):
        email = element('email', 'string')

    ExtendedForm.redefine('name', input='textarea')

    assert list(BaseForm.__declarations__) == ['name']
    assert list(ExtendedForm.__declarations__) == ['name', 'email']
    assert BaseForm.__declarations__['name'].input_type == 'text'
    assert ExtendedForm.__declarations__['name'].input_type == 'textarea'


def test_subclass_overrides_in_place():
    class BaseForm(Form):
        name = element('text', 'string')
        email = element('email', 'string')

    class ChildForm(BaseForm):
        name = element('textarea', 'string')

    assert list(ChildForm.__declarations__) == ['name', 'email']
    assert ChildForm.__declarations__['name'].input_type == 'textarea'


def test_inline_declarations():
    class ContactForm(Form):
        address = subform(street=element('text', 'string'), city=element('text', 'string'))
        phones = many(default=[{}], number=element('tel', 'string'))

    address = ContactForm.__declarations__['address']
    assert list(address.declarations) == ['street', 'city']
    assert address.node_class is None

    phones = ContactForm.__declarations__['phones']
    assert phones.default == [{}]
    assert list(phones.subform.declarations) == ['number']


def test_element_configuration():
    definition = element(
        dict(type='select', multiple=True, class_='form-control'),
        dict(type='array', of='integer', presence=True, if_='needs_tags'),
        label=dict(text='Tags', class_='form-label'),
        options={1: 'One', 2: 'Two'},
        tags=dict(group='meta'),
    )

    assert definition.input_type == 'select'
    assert definition.input.get('multiple') is True
    assert definition.output.item_type is int
    assert definition.output.presence is True
    assert definition.output.if_ == 'needs_tags'
    assert definition.label.text == 'Tags'
    assert definition.label.attrs == {'class_': 'form-label'}
    assert definition.options == ((1, 'One'), (2, 'Two'))
    assert definition.tags == {'group': 'meta'}

    assert element('text', label=False).label.display is False
    assert element(options=['a', 'b']).options == (('a', 'a'), ('b', 'b'))


def test_invalid_definitions():
    with pytest.raises(DefinitionError) as e:
        element('text', 'money')
    assert e.value.errcode == 'F10.501'

    with pytest.raises(DefinitionError) as e:
        element(42)
    assert e.value.errcode == 'F10.502'

    with pytest.raises(DefinitionError) as e:
        element('text', dict(type='array', of='money'))
    assert e.value.errcode == 'F10.501'

    with pytest.raises(DefinitionError) as e:
        element('text', 42)
    assert e.value.errcode == 'F10.503'


def test_redefine_element_and_nested():
    class SecureOrderForm(OrderForm):
        pass

    SecureOrderForm.redefine('name', output=dict(type='string', presence=True), tags=dict(secure=True))
    SecureOrderForm.redefine(
        'items',
        lambda builder: builder.redefine('quantity', output=dict(type='integer', presence=True)),
        default=[{}],
    )

    name = SecureOrderForm.__declarations__['name']
    assert name.output.presence is True
    assert name.tags == {'secure': True}

    items = SecureOrderForm.__declarations__['items']
    assert items.default == [{}]
    assert items.subform.declarations['quantity'].output.presence is True
    assert items.subform.declarations['price'].output.presence is False

    assert OrderForm.__declarations__['name'].output.presence is False
    assert OrderForm.__declarations__['items'].default is None


def test_declare_and_remove():
    class NoteForm(Form):
        title = element('text', 'string')
        body = element('textarea', 'string')

    NoteForm.declare('author', element('text', 'string'))
    assert list(NoteForm.__declarations__) == ['title', 'body', 'author']

    NoteForm.declare('files', many(name=element('text', 'string'), caption=element('text', 'string')))
    NoteForm.redefine('files', lambda builder: builder.remove('caption'))
    assert list(NoteForm.__declarations__['files'].subform.declarations) == ['name']


def test_redefine_errors():
    class NoteForm(Form):
        title = element('text', 'string')
        meta = subform(tag=element('text', 'string'))

    with pytest.raises(DefinitionError) as e:
        NoteForm.redefine('missing', input='textarea')
    assert e.value.errcode == 'F10.507'

    with pytest.raises(DefinitionError) as e:
        NoteForm.redefine('title', lambda builder: None)
    assert e.value.errcode == 'F10.508'

    with pytest.raises(DefinitionError) as e:
        NoteForm.redefine('meta', input='textarea')
    assert e.value.errcode == 'F10.509'

    with pytest.raises(DefinitionError) as e:
        NoteForm.declare('broken', 'text')
    assert e.value.errcode == 'F10.506'


def test_redefine_resets_params_definition():
    class NoteForm(Form):
        title = element('text', 'string')

    first = NoteForm.params_definition()
    assert NoteForm.params_definition() is first

    NoteForm.declare('body', element('textarea', 'string'))
    second = NoteForm.params_definition()
    assert second is not first
    assert 'body' in second.model_fields


def test_subform_class_declarations():
    class AddressSubform(Subform):
        street = element('text', 'string')

    class CityAddressSubform(AddressSubform):
        city = element('text', 'string')

    assert list(CityAddressSubform.__declarations__) == ['street', 'city']
    assert list(AddressSubform.__declarations__) == ['street']
