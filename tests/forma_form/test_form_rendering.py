from forma.form import Form, element, many, subform, unflatten_params
from forma.form.html import attributes, tag
from forma.form.inputs import InputRendererRegistry, PlainInput, renderer_for
from forma_test.sample_forms import PETS, Info, InfoForm, OrderForm, ViewHelpers


def pets_select(index, selected=None):
    options = ''.join(
        f'<option value="{pet.id}" selected>{pet.name}</option>' if pet.id == selected
        else f'<option value="{pet.id}">{pet.name}</option>'
        for pet in PETS
    )
    return (
        '<div class="col-md-6">'
        f'<label for="info_pets_attributes_{index}_id" class="form-label">Pets</label>'
        f'<select multiple class="form-control" name="info[pets_attributes][{index}][id]" id="info_pets_attributes_{index}_id">'
        f'{options}'
        '</select>'
        '</div>'
    )


def script(source):
    return f'<script type="text/javascript">{source}</script>'


def test_info_form_html():
    form = InfoForm(Info(), helpers=ViewHelpers())
    pets = form['pets']

    expected_html = (
        '<div class="row">'
        '<form method="post" action="/create" accept-charset="UTF-8">'
        '<input name="utf8" type="hidden" value="✓" autocomplete="off">'
        f'<input name="authenticity_token" type="hidden" value="{ViewHelpers.AUTHENTICITY_TOKEN}">'
        '<input name="_method" type="hidden" value="post" autocomplete="off">'
        '<div class="col-md-6">'
        '<label for="info_birthdate">Birthdate</label>'
        '<input type="text" class="form-control" name="info[birthdate]" id="info_birthdate" value="1990-01-01">'
        '</div>'
        '<div class="col-md-6">'
        '<label for="info_biography" class="form-label">Biography</label>'
        '<input name="info[biography]" type="hidden" value="0" autocomplete="off">'
        '<input type="checkbox" name="info[biography]" id="info_biography" value="1">'
        '</div>'
        '<div class="col-md-6">'
        '<input type="checkbox" name="info[interests][]" id="info_interests_1" value="1" checked>'
        '<label for="info_interests_1" class="form-label">Science</label>'
        '<input type="checkbox" name="info[interests][]" id="info_interests_2" value="2">'
        '<label for="info_interests_2" class="form-label">Technology</label>'
        '<input type="checkbox" name="info[interests][]" id="info_interests_3" value="3" checked>'
        '<label for="info_interests_3" class="form-label">Engineering</label>'
        '<input type="checkbox" name="info[interests][]" id="info_interests_4" value="4">'
        '<label for="info_interests_4" class="form-label">Math</label>'
        '</div>'
        '<div class="col-md-6">'
        '<label for="info_car_attributes_maker_id">Toyota</label>'
        '<input type="radio" class="form-control" name="info[car_attributes][maker_id]" id="info_car_attributes_maker_id" value="1" checked>'
        '<label for="info_car_attributes_maker_id">Ford</label>'
        '<input type="radio" class="form-control" name="info[car_attributes][maker_id]" id="info_car_attributes_maker_id" value="2">'
        '<label for="info_car_attributes_maker_id">Chevrolet</label>'
        '<input type="radio" class="form-control" name="info[car_attributes][maker_id]" id="info_car_attributes_maker_id" value="3">'
        '</div>'
        f'{script(pets.remove_subform_js())}'
        f'{script(pets.add_subform_js())}'
        '<div id="pets_0" class="pets_subform">'
        f'{pets_select(0, selected=1)}'
        '</div>'
        '<div id="pets_1" class="pets_subform">'
        f'{pets_select(1, selected=2)}'
        '</div>'
        '<template id="pets_template">'
        '<div class="new_pets">'
        f'{pets_select("NEW_RECORD")}'
        '</div>'
        '</template>'
        '<input name="commit" type="submit" value="Create Info">'
        '</form>'
        '</div>'
    )

    assert form.render() == expected_html
    assert form.render() == form.render()
    assert str(form.__html__()) == expected_html


def test_collection_scripts():
    pets = InfoForm(Info())['pets']

    add_js = pets.add_subform_js()
    assert 'function actionFormAddSubform(event)' in add_js
    assert 'document.querySelector("#pets_template")' in add_js
    assert 'replace(/NEW_RECORD/g' in add_js

    remove_js = pets.remove_subform_js()
    assert 'function actionFormRemoveSubform(event)' in remove_js
    assert 'closest(".new_pets")' in remove_js
    assert 'closest(".pets_subform")' in remove_js
    assert "input[name*='_destroy']" in remove_js


def test_unbound_form_html():
    class SearchForm(Form):
        query = element(dict(type='search', placeholder='Search'), 'string', label='Find')
        note = element('textarea', 'string', label=False)
        kind = element('select', 'string', options=[('a', 'Alpha'), ('b', 'Beta')])

        class Meta:
            scope = 'search'

    form = SearchForm(action='/search', method='get', class_='search-form')
    assert form.render() == (
        '<form method="get" action="/search" accept-charset="UTF-8" class="search-form">'
        '<label for="search_query">Find</label>'
        '<input type="search" placeholder="Search" name="search[query]" id="search_query">'
        '<textarea name="search[note]" id="search_note"></textarea>'
        '<label for="search_kind">Kind</label>'
        '<select name="search[kind]" id="search_kind">'
        '<option value="a">Alpha</option>'
        '<option value="b">Beta</option>'
        '</select>'
        '<input name="commit" type="submit" value="Create">'
        '</form>'
    )


def test_bound_mapping_values():
    class ProfileForm(Form):
        nickname = element('text', 'string')
        bio = element('textarea', 'string')
        active = element('checkbox', 'bool')
        plan = element('select', 'string', options=['free', 'pro'])

    form = ProfileForm({'nickname': 'Jo <3', 'bio': 'a & b', 'active': 'true', 'plan': 'pro'}, scope='user')
    html = form.render()

    assert '<input type="text" name="user[nickname]" id="user_nickname" value="Jo &lt;3">' in html
    assert '<textarea name="user[bio]" id="user_bio">a &amp; b</textarea>' in html
    assert '<input type="checkbox" name="user[active]" id="user_active" value="1" checked>' in html
    assert '<option value="pro" selected>pro</option>' in html


def test_multiple_select_of_array():
    class TagsForm(Form):
        tags = element(
            dict(type='select', multiple=True), dict(type='array', of='integer'),
            options=[(1, 'One'), (2, 'Two'), (3, 'Three')],
        )

        class Meta:
            scope = 'post'

    form = TagsForm({'tags': [1, 3]})
    assert (
        '<label for="post_tags">Tags</label>'
        '<select multiple name="post[tags][]" id="post_tags">'
        '<option value="1" selected>One</option>'
        '<option value="2">Two</option>'
        '<option value="3" selected>Three</option>'
        '</select>'
    ) in form.render()

    submitted = unflatten_params([('post[tags][]', '1'), ('post[tags][]', '3')])
    params = TagsForm.params_definition().new(submitted['post'])
    assert params.tags == [1, 3]
    assert params.create_form().render() == form.render()


def test_render_if_and_detached():
    class FlagForm(Form):
        shown = element('text', 'string')
        hidden = element('text', 'string', render_if=lambda node: False)
        marker = element(dict(type='hidden', value='keep'), 'string', detached=True)
        locked = element('text', 'string', disabled=True, readonly=True)

    form = FlagForm({'marker': 'ignored', 'locked': 'x'})
    html = form.render()

    assert 'name="hidden"' not in html
    assert '<input type="hidden" value="keep" name="marker" id="marker">' in html
    assert '<input type="text" name="locked" id="locked" value="x" disabled readonly>' in html


def test_field_errors_are_rendered():
    params = OrderForm.params_definition().new({'items_attributes': [{'quantity': 'many'}]})
    assert params.invalid()

    form = params.create_form()
    html = form.render()

    assert (
        '<input type="number" name="order[items_attributes][0][quantity]" id="order_items_attributes_0_quantity">'
        '<div class="field-errors" id="order_items_attributes_0_quantity_errors">is invalid</div>'
    ) in html
    assert form['items'].rows[0]['quantity'].tags['errors'] is True
    assert form['name'].tags['errors'] is False


def test_subform_rendering():
    class AccountForm(Form):
        owner_name = element('text', 'string')
        address = subform(street=element('text', 'string'))

    form = AccountForm({'address': {'street': 'Main St'}})
    html = form.render()

    assert '<input type="text" name="owner_name" id="owner_name">' in html
    assert (
        '<label for="address_attributes_street">Street</label>'
        '<input type="text" name="address_attributes[street]" id="address_attributes_street" value="Main St">'
    ) in html

    scoped = AccountForm({'address_attributes': {'street': 'Elm'}}, scope='account')
    assert 'name="account[address_attributes][street]"' in scoped.render()
    assert scoped['address']['street'].value == 'Elm'


def test_html_builder():
    assert str(tag('input', {'type': 'text', 'required': True, 'disabled': False, 'value': None})) == \
        '<input type="text" required>'
    assert str(tag('div', {'class_': 'row', 'data': {'row_id': 3}}, 'a < b')) == \
        '<div class="row" data-row-id="3">a &lt; b</div>'
    assert str(attributes({'aria': {'label': 'Close'}})) == ' aria-label="Close"'


def test_input_renderer_registry():
    assert isinstance(renderer_for('email'), PlainInput)
    assert isinstance(renderer_for('checkbox'), InputRendererRegistry.get('checkbox'))
    assert InputRendererRegistry.contains('textarea')


def test_inline_collection_rows():
    class ListForm(Form):
        entries = many(label=element('text', 'string'))

    form = ListForm({'entries_attributes': {'1': {'label': 'second'}, '0': {'label': 'first'}}}, scope='list')
    entries = form['entries']

    assert [row.index for row in entries.rows] == [0, 1]
    assert [row['label'].value for row in entries.rows] == ['first', 'second']
    assert entries.template.index == 'NEW_RECORD'
    assert entries.template['label'].html_name == 'list[entries_attributes][NEW_RECORD][label]'
    assert entries.rows[1]['label'].html_id == 'list_entries_attributes_1_label'
    assert len(entries) == 3


def test_element_tags():
    class TaggedForm(Form):
        title = element('text', 'string', tags=dict(group='main', input='custom'))
        color = element('select', options=['red', 'blue'])

    form = TaggedForm()
    assert form['title'].tags == {'group': 'main', 'input': 'text', 'output': 'string', 'errors': False}
    assert form['color'].tags == {'input': 'select', 'options': True, 'errors': False}

    order = OrderForm()
    assert order['items'].template['quantity'].tags == {
        'input': 'number', 'output': 'integer', 'errors': False, 'subform': 'items',
    }
    assert order['customer'].tags == {'index': None, 'template': False}
    assert order['items'].template.tags == {'index': 'NEW_RECORD', 'template': True}
