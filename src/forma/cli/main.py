#!/usr/bin/env python3
"""Render declared forms and print their params definitions."""
import importlib
import json

import click

from forma import __version__, logger
from forma.error import FormaException
from forma.form import Form, FormRegistry, SchemaPolicy, generate_params_definition
from forma.helper import load_class


def resolve_form(target, modules=()):
    ''' A form class from a "package.module:FormClass" path or a registered key. '''
    for module in modules:
        importlib.import_module(module)

    if ':' in target:
        form_class = load_class(target)
    else:
        form_class = FormRegistry.get(target)

    if not (isinstance(form_class, type) and issubclass(form_class, Form)):
        raise click.BadParameter(f"[{target}] is not a form class", param_hint='TARGET')

    return form_class


module_option = click.option(
    '--module', '-m', 'modules', multiple=True,
    help="Module to import before resolving TARGET (registers its forms)"
)


@click.group()
@click.version_option(version=__version__)
def cli():
    """forma command line tool."""
    pass


@cli.command()
@click.argument('target')
@module_option
@click.option('--action', '-a', default=None, help="Form action URL")
def render(target, modules, action):
    """Print the HTML of an unbound form."""
    try:
        form_class = resolve_form(target, modules)
    except FormaException as e:
        raise click.ClickException(str(e))

    html_options = {'action': action} if action else {}
    form = form_class(**html_options)
    logger.info("Rendering form: %s", form_class.__name__)
    click.echo(form.render())


@cli.command()
@click.argument('target')
@module_option
@click.option('--policy', '-p', type=click.Choice([policy.value for policy in SchemaPolicy]),
              default=None, help="Generate from declarations or from the rendered form")
def schema(target, modules, policy):
    """Print the JSON schema of the params definition of a form."""
    try:
        form_class = resolve_form(target, modules)
    except FormaException as e:
        raise click.ClickException(str(e))

    if policy == SchemaPolicy.RENDERED.value:
        params_class = generate_params_definition(form_class, form_class().nodes)
    else:
        params_class = form_class.params_definition()

    click.echo(json.dumps(params_class.model_json_schema(), indent=2, default=str))


if __name__ == '__main__':
    cli()
