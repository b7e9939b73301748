from collections import namedtuple

from forma.form import Form, ModelForm, Subform, element, many, subform
from forma.form.html import tag


Pet = namedtuple('Pet', ['id', 'name'])
Car = namedtuple('Car', ['maker_id'])
Maker = namedtuple('Maker', ['id', 'name'])
Interest = namedtuple('Interest', ['id', 'name'])

MAKERS = (Maker(1, "Toyota"), Maker(2, "Ford"), Maker(3, "Chevrolet"))
PETS = (Pet(1, "Fido"), Pet(2, "Buddy"), Pet(3, "Max"), Pet(4, "Bella"), Pet(5, "Luna"))
INTERESTS = (Interest(1, "Science"), Interest(2, "Technology"), Interest(3, "Engineering"), Interest(4, "Math"))


class Info(object):
    def __init__(self):
        self.birthdate = "1990-01-01"
        self.biography = False
        self.pets = [Pet(1, "Fido"), Pet(2, "Buddy")]
        self.car = Car(1)
        self.interests = [1, 3]

    def persisted(self):
        return False


class ViewHelpers(object):
    AUTHENTICITY_TOKEN = "XD2kMuxmzYBT2emHESuqFrxJKlwKZnJPmQsL9zBxby2BtSqUzQPVNMJfF_3bbG9UksL2Gevrt803ZEBGnRixTg"

    def polymorphic_path(self, model):
        return "/create"

    def form_authenticity_token(self):
        return self.AUTHENTICITY_TOKEN


class InfoForm(ModelForm):
    birthdate = element(
        dict(type='text', class_='form-control'),
        dict(type='date', presence=True),
    )
    biography = element(
        'checkbox', dict(type='bool', presence=True),
        label=dict(text="Biography", class_='form-label'),
    )
    interests = element(
        'checkbox', dict(type='array', of='integer', presence=True),
        options=[(item.id, item.name) for item in INTERESTS],
        label=dict(class_='form-label'),
    )
    car = subform(
        maker_id=element(
            dict(type='radio', class_='form-control'), dict(type='string', presence=True),
            options=[(item.id, item.name) for item in MAKERS],
        ),
    )
    pets = many(
        id=element(
            dict(type='select', multiple=True, class_='form-control'), dict(type='integer', presence=True),
            options=[(item.id, item.name) for item in PETS],
            label=dict(text="Pets", class_='form-label'),
        ),
    )

    class Meta:
        key = "info-form"

    def render_element(self, element):
        return tag('div', {'class': 'col-md-6'}, super().render_element(element))

    def view_template(self):
        return tag('div', {'class': 'row'}, super().view_template())


class CustomerSubform(Subform):
    name = element('text', 'string')


class ItemSubform(Subform):
    name = element('text', 'string')
    quantity = element('number', 'integer')
    price = element('number', 'float')


class OrderForm(Form):
    name = element('text', 'string')
    customer = subform(CustomerSubform)
    items = many(ItemSubform)

    class Meta:
        scope = "order"
        key = "order-form"


class RegistrationForm(Form):
    email = element('email', dict(type='string', presence=True))
    password = element('password', 'string')
    password_confirmation = element('password', 'string')
    profile = subform(default={}, name=element('text', 'string'))
    pets = many(default=[{}], name=element('text', 'string'))

    class Meta:
        scope = "registration"
        key = "registration-form"

    def check_password_confirmation(self):
        return True

    def check_password(self):
        return True

    def check_profile_name(self):
        return True

    def check_pets_name(self):
        return True


class VariantSubform(Subform):
    name = element('text', 'string', render_if='variants_name_render')
    price = element('number', 'float', render_if='variants_price_render')


class ManufacturerSubform(Subform):
    name = element('text', 'string', render_if='manufacturer_name_render')


class ProductForm(Form):
    name = element('text', 'string', render_if='name_render')
    variants = many(VariantSubform, default=[{}])
    manufacturer = subform(ManufacturerSubform, default={})

    class Meta:
        scope = "product"


class HostObject(object):
    ''' Answers the render predicates of ProductForm. '''

    def __init__(self, **flags):
        self.flags = flags

    def _flag(self, name):
        return self.flags.get(name, True)

    def name_render(self):
        return self._flag('name')

    def variants_name_render(self):
        return self._flag('variants_name')

    def variants_price_render(self):
        return self._flag('variants_price')

    def manufacturer_name_render(self):
        return self._flag('manufacturer_name')


class Product(object):
    def __init__(self, name=None, variants=(), manufacturer=None):
        self.name = name
        self.variants = list(variants)
        self.manufacturer = manufacturer

    def persisted(self):
        return False


Variant = namedtuple('Variant', ['name', 'price'])
Manufacturer = namedtuple('Manufacturer', ['name'])
