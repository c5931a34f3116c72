"""Objective-C source rendering from enriched models."""

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from ...language import TEMPLATES_DIR
from ..gen_logging import for_model, get_logger, log_event
from ..models import ModelInfo

logger = get_logger(__name__)

IMPORT_ALL_HEADER = "LoopbackModelImport.h"

# template -> file name suffix appended to the generated class name
MODEL_TEMPLATES = {
    "model-h.jinja": ".h",
    "model-m.jinja": ".m",
    "repo-h.jinja":  "Repository.h",
    "repo-m.jinja":  "Repository.m",
}


def make_environment(templates_dir: Optional[Union[str, Path]] = None) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(templates_dir or TEMPLATES_DIR)),
        autoescape=select_autoescape(disabled_extensions=("jinja",)),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )


def referenced_classes(meta: ModelInfo, generated_classes: Iterable[str]) -> List[str]:
    """
    Other generated classes the model's headers must know about: relation
    targets plus model types used by method arguments and return values.
    """
    generated = set(generated_classes)
    candidates = list(meta.more_include)
    for method in meta.objc_methods:
        candidates.append(method.return_type)
        candidates.extend(arg.type[:-2] for arg in method.arguments if arg.type.endswith(" *"))

    classes = []
    for cls in candidates:
        if cls in generated and cls != meta.objc_model_name and cls not in classes:
            classes.append(cls)
    return classes


def render_objc_files(
    models: Dict[str, ModelInfo],
    templates_dir: Optional[Union[str, Path]] = None,
) -> Dict[str, str]:
    """Render every model into a {file name: content} map."""
    env = make_environment(templates_dir)
    generated_classes = [meta.objc_model_name for meta in models.values()]

    files = {}
    for meta in models.values():
        forward_classes = referenced_classes(meta, generated_classes)
        for template_name, suffix in MODEL_TEMPLATES.items():
            template = env.get_template(template_name)
            files[meta.objc_model_name + suffix] = template.render(
                meta=meta,
                forward_classes=forward_classes,
            )
        log_event(for_model(logger, meta.name), "RENDER", f"{meta.objc_model_name} ({len(meta.objc_methods)} methods)")

    # Create include all for easy use
    files[IMPORT_ALL_HEADER] = env.get_template("all-h.jinja").render(
        models=list(models.values()),
        import_header=IMPORT_ALL_HEADER,
    )
    return files


def write_generated_files(files: Dict[str, str], out_dir: Union[str, Path]) -> List[Path]:
    """Write a rendered file map below `out_dir`."""
    out_path = Path(out_dir)
    out_path.mkdir(parents=True, exist_ok=True)

    written = []
    for file_name, content in files.items():
        output_file = out_path / file_name
        output_file.write_text(content, encoding="utf-8")
        log_event(logger, "GENERATED", str(output_file))
        written.append(output_file)
    return written
