from types import SimpleNamespace

import pytest


def test_setup_module():
    from forma import setupModule

    defaults = SimpleNamespace(TEST_CONFIG_KEY='sample-value', lowercase_key='ignored')
    config, logger = setupModule('test_setupModule', defaults)
    assert config.TEST_CONFIG_KEY == 'sample-value'
    assert config.get('LOWERCASE_KEY') is None
    assert config['LOG_LEVEL'] == 'info'
    assert logger.name == 'test_setupModule'

    with pytest.raises(AttributeError):
        config.UNDECLARED_KEY


def test_form_module_config():
    from forma.form._meta import config

    assert config.NEW_RECORD_PLACEHOLDER == 'NEW_RECORD'
    assert config.NESTED_ATTRIBUTES_SUFFIX == '_attributes'
    assert config.DEFAULT_SCHEMA_POLICY == 'declared'


def test_humanize():
    from forma.helper import humanize

    assert humanize('name') == 'Name'
    assert humanize('maker_id') == 'Maker'
    assert humanize('password_confirmation') == 'Password confirmation'
    assert humanize('items_attributes[0].name') == 'Items attributes[0] name'
    assert humanize('customer_attributes.name') == 'Customer attributes name'


def test_camel_to_lower():
    from forma.helper import camel_to_lower

    assert camel_to_lower('Info') == 'info'
    assert camel_to_lower('OrderItem') == 'order_item'
    assert camel_to_lower('OrderItem', '-') == 'order-item'


def test_load_class():
    from forma.helper import load_class
    from forma.form import Form

    assert load_class('forma.form:Form') is Form
    assert load_class('forma.form.Form') is Form


def test_hybridmethod():
    from forma.helper import hybridmethod

    class Sample(object):
        @hybridmethod
        def describe(cls):
            return f'class {cls.__name__}'

        @describe.instancemethod
        def describe(self):
            return f'instance of {type(self).__name__}'

    class ClassOnly(object):
        @hybridmethod
        def describe(cls):
            return cls.__name__

    assert Sample.describe() == 'class Sample'
    assert Sample().describe() == 'instance of Sample'
    assert ClassOnly().describe() == 'ClassOnly'


def test_class_registry():
    from forma.helper import ClassRegistry
    from forma.error import BadRequestError, NotFoundError

    class Widget(object):
        pass

    WidgetRegistry = ClassRegistry(Widget)

    @WidgetRegistry.register
    class TextWidget(Widget):
        pass

    @WidgetRegistry.register('select-box')
    class SelectWidget(Widget):
        pass

    assert WidgetRegistry.keys() == ('text_widget', 'select-box')
    assert WidgetRegistry.get('select-box') is SelectWidget
    assert WidgetRegistry.get(TextWidget) is TextWidget
    assert isinstance(WidgetRegistry.construct('text_widget'), TextWidget)
    assert WidgetRegistry.contains('select-box')
    assert WidgetRegistry.get_registry()['text_widget'] is TextWidget

    with pytest.raises(BadRequestError) as e:
        WidgetRegistry.register('select-box')(type('OtherWidget', (Widget,), {}))
    assert e.value.errcode == 'H00.302'

    with pytest.raises(BadRequestError) as e:
        WidgetRegistry.register('plain')(object)
    assert e.value.errcode == 'H00.303'

    with pytest.raises(NotFoundError):
        WidgetRegistry.get('unknown')

    assert WidgetRegistry.unregister('select-box') is SelectWidget
    assert not WidgetRegistry.contains('select-box')


def test_post_register_hook():
    from forma.helper import ClassRegistry

    class Plugin(object):
        pass

    def tag_plugin(cls, key, **kwargs):
        cls.tagged = (key, kwargs)

    PluginRegistry = ClassRegistry(Plugin, post_register=tag_plugin)

    @PluginRegistry.register('sample', priority=1)
    class SamplePlugin(Plugin):
        pass

    assert SamplePlugin.tagged == ('sample', {'priority': 1})
    assert PluginRegistry.get_history()[0] == (SamplePlugin, 'sample', {'priority': 1})


def test_exceptions():
    from forma.error import (
        BadRequestError,
        DefinitionError,
        FormaException,
        InternalServerError,
        OwnerChainError,
    )

    error = BadRequestError("F30.401", "Invalid parameter name")
    assert str(error) == "F30.401 [400] >> Invalid parameter name"
    assert error.content == {"errcode": "F30.401", "message": "Invalid parameter name"}

    error = OwnerChainError("F20.404", "Unresolved", {"name": "visible"})
    assert isinstance(error, FormaException)
    assert isinstance(error, AttributeError)
    assert error.content["details"] == {"name": "visible"}

    assert issubclass(DefinitionError, InternalServerError)
    assert DefinitionError("F10.501", "bad").status_code == 500


def test_data_models():
    from forma.data import BlankModel, DataModel

    class Point(DataModel):
        x: int = 0
        y: int = 0
        label: str = None

    point = Point.create({'x': 1}, defaults={'y': 5})
    assert (point.x, point.y) == (1, 5)
    assert point.set(x=3).x == 3
    assert point.x == 1
    assert point.model_dump() == {'x': 1, 'y': 5}

    record = BlankModel.create(None, defaults={'id': None, '_destroy': None}, name='new')
    assert record.id is None
    assert record.name == 'new'
    assert record.set(id=1).id == 1
    assert record.serialize() == {'id': None, '_destroy': None, 'name': 'new'}
