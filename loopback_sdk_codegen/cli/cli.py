from datetime import date
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from loopback_sdk_codegen.api.extractors import convert_to_objc_return_type
from loopback_sdk_codegen.api.gen_logging import configure_gen_logging
from loopback_sdk_codegen.api.generator import build_objc_metadata, generate_to_directory
from loopback_sdk_codegen.errors import CodegenError
from loopback_sdk_codegen.language import load_descriptor
from loopback_sdk_codegen.settings import get_settings

console = Console()


def _today() -> str:
    return date.today().strftime('%Y-%m-%d')


@click.group()
@click.pass_context
def cli(context):
    context.ensure_object(dict)
    context.obj["settings"] = get_settings()


@cli.command("validate", help="Descriptor validation")
@click.pass_context
@click.argument("descriptor_path")
def validate(context, descriptor_path):
    try:
        descriptor = load_descriptor(descriptor_path)
        console.print(
            f"[{_today()}] Descriptor validation success! ({len(descriptor.models)} classes)",
            style='green',
        )
    except CodegenError as e:
        console.print(f"[{_today()}] Validation failed with error(s): {e}", style='red')
        context.exit(1)
    else:
        context.exit(0)


@cli.command("inspect", help="Print the models, generated selectors and scopes of a descriptor.")
@click.pass_context
@click.argument("descriptor_path")
@click.option("--prefix", "model_prefix", default=None, help="Class name prefix (default: LBSDK_MODEL_PREFIX or none).")
def inspect_cmd(context, descriptor_path, model_prefix):
    settings = context.obj["settings"]
    if model_prefix is None:
        model_prefix = settings.model_prefix
    try:
        metadata = build_objc_metadata(load_descriptor(descriptor_path), model_prefix)
    except CodegenError as e:
        console.print(f"[{_today()}] Inspect failed with error(s): {e}", style='red')
        context.exit(1)
    else:
        _print_metadata(metadata)
        context.exit(0)


def _print_metadata(metadata):
    for meta in metadata.models.values():
        console.print(
            f"\n[bold]{meta.objc_model_name}[/bold] : {meta.objc_base_model}"
            f"  (model {meta.name}, /{meta.plural_name})"
        )
        if meta.objc_props:
            props = Table("Property", "Type", show_edge=False)
            for prop in meta.objc_props:
                props.add_row(prop.name, prop.type.strip())
            console.print(props)

        methods = Table("Remote method", "Selector", "Returns", show_edge=False)
        for method in meta.objc_methods:
            methods.add_row(method.raw_name, _selector(method.prototype), method.return_type)
        console.print(methods)

        for scope_name, scope in meta.scopes.items():
            if scope is None:
                console.print(f"  scope {scope_name}: skipped", style="yellow")
            else:
                console.print(f"  scope {scope_name} -> {scope.target_class}")
                for api_name, method in scope.methods.items():
                    console.print(f"    {api_name}: {_scope_return_type(meta, method, metadata.exposed)}")

        if meta.more_include:
            console.print(f"  includes: {', '.join(meta.more_include)}")


@cli.command("generate", help="Emit Objective-C models and repositories for a descriptor.")
@click.pass_context
@click.argument("descriptor_path")
@click.option("--prefix", "model_prefix", default=None, help="Class name prefix, e.g. XX (default: LBSDK_MODEL_PREFIX or none).")
@click.option("--out", "out_dir", default=None, help="Output directory (default: LBSDK_OUTPUT_DIR or ./generated)")
@click.option("--templates", "templates_dir", default=None, help="Alternative Jinja2 templates directory.")
@click.option("-v", "--verbose", is_flag=True, help="Log every model, property and method.")
@click.option("-q", "--quiet", is_flag=True, help="Only log warnings and errors.")
def generate(context, descriptor_path, model_prefix, out_dir, templates_dir, verbose, quiet):
    settings = context.obj["settings"]
    configure_gen_logging(verbose=verbose, quiet=quiet)

    if model_prefix is None:
        model_prefix = settings.model_prefix
    out_path = Path(out_dir or settings.output_dir).resolve()
    templates_dir = templates_dir or settings.templates_dir

    try:
        descriptor = load_descriptor(descriptor_path)
        written = generate_to_directory(descriptor, out_path, model_prefix, templates_dir)
    except CodegenError as e:
        console.print(f"[{_today()}] Generate failed with error(s): {e}", style="red")
        context.exit(1)
    else:
        console.print(f"[{_today()}] {len(written)} files emitted to: {out_path}", style="green")
        context.exit(0)


def _scope_return_type(meta, method, exposed) -> str:
    # Scope accessors are only listed here; the repository templates do not render them
    objc_type = convert_to_objc_return_type(
        method.return_info.type, meta.name, meta.objc_model_name, exposed, method.returns_array
    )
    return objc_type or "unsupported"


def _selector(prototype: str) -> str:
    return " ".join(prototype.split())


def main():
    cli()


if __name__ == "__main__":
    main()
