"""CLI - Command line interface for Resume Designer."""

from __future__ import annotations

import argparse
import asyncio
import re
import sys
from pathlib import Path
from typing import List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from .config import Severity, load_config, load_raw_config, validate_config
from .contracts import DesignPreviewModel, DesignRequest, QuestionnairePayload
from .errors import AllCandidatesFailed, ConfigurationError
from .observability import setup_logging
from .service import DesignService, build_orchestrator
from .templates import DESIGN_TEMPLATES

console = Console()

EXIT_OK = 0
EXIT_ALL_FAILED = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resume-designer",
        description="Resume Designer - generate validated, print-ready resume designs",
    )
    parser.add_argument(
        "--config", "-c",
        default="config/config.local.yaml",
        help="Path to configuration file (merged over config/config.yaml)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every generation attempt")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("templates", help="List the curated design templates")
    subparsers.add_parser("check-config", help="Validate the configuration and exit")

    preview = subparsers.add_parser("preview", help="Generate several design previews")
    preview.add_argument("resume", type=Path, help="Plain-text resume file")
    preview.add_argument("--count", "-n", type=int, default=3, help="Number of candidates (default: 3)")
    preview.add_argument("--answers", type=Path, help="YAML questionnaire answers (questionnaire mode)")
    preview.add_argument("--out", "-o", type=Path, default=Path("designs"), help="Output directory")

    generate = subparsers.add_parser("generate", help="Generate one design")
    generate.add_argument("resume", type=Path, help="Plain-text resume file")
    generate.add_argument("--template", "-t", help="Template name (default: random)")
    generate.add_argument("--answers", type=Path, help="YAML questionnaire answers (questionnaire mode)")
    generate.add_argument("--out", "-o", type=Path, default=Path("designs"), help="Output directory")

    return parser


def print_templates() -> None:
    table = Table(title="Design Templates")
    table.add_column("Name", style="cyan")
    table.add_column("Style")
    table.add_column("Layout")
    table.add_column("Accent")
    table.add_column("Fonts", style="dim")
    for template in DESIGN_TEMPLATES:
        table.add_row(
            template.name,
            template.style,
            template.layout,
            f"[{template.accent_color}]■[/] {template.accent_color}",
            " / ".join(template.fonts),
        )
    console.print(table)


def print_summary(designs: List[DesignPreviewModel], paths: List[Path]) -> None:
    table = Table(title="Generated Designs")
    table.add_column("Template", style="cyan")
    table.add_column("ATS score", justify="right")
    table.add_column("Contrast")
    table.add_column("File", style="dim")
    for design, path in zip(designs, paths):
        ats_style = "green" if design.ats_score >= 70 else "red"
        contrast = "[green]pass[/]" if design.contrast_passed else "[red]fail[/]"
        table.add_row(design.template_name, f"[{ats_style}]{design.ats_score}[/]", contrast, str(path))
    console.print(table)


def write_designs(designs: List[DesignPreviewModel], out_dir: Path) -> List[Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    paths = []
    for index, design in enumerate(designs, 1):
        slug = re.sub(r"[^a-z0-9]+", "-", design.template_name.lower()).strip("-") or "design"
        path = out_dir / f"{index:02d}-{slug}.html"
        path.write_text(design.html, encoding="utf-8")
        paths.append(path)
    return paths


def check_config(config_path: str) -> int:
    issues = validate_config(load_raw_config(config_path))
    if not issues:
        console.print("✅ Configuration is valid", style="green")
        return EXIT_OK
    for issue in issues:
        style = "red" if issue.severity == Severity.ERROR else "yellow"
        console.print(f"[{issue.severity.value}] {issue.field}: {issue.message}", style=style)
    return EXIT_USAGE if any(i.severity == Severity.ERROR for i in issues) else EXIT_OK


def build_request(args: argparse.Namespace) -> DesignRequest:
    resume_text = args.resume.read_text(encoding="utf-8")
    questionnaire = None
    if args.answers:
        with open(args.answers, encoding="utf-8") as f:
            questionnaire = QuestionnairePayload(**(yaml.safe_load(f) or {}))
    return DesignRequest(
        resume_text=resume_text,
        mode="questionnaire" if questionnaire else "template",
        count=getattr(args, "count", 1),
        template_name=getattr(args, "template", None),
        questionnaire=questionnaire,
    )


async def run_design(args: argparse.Namespace) -> int:
    service = DesignService(build_orchestrator(load_config(args.config)))
    request = build_request(args)

    if args.command == "preview":
        with console.status(f"Generating {request.count} design(s)..."):
            response = await service.preview(request)
        designs = response.designs
    else:
        with console.status("Generating design..."):
            response = await service.generate(request)
        designs = [response.design]

    paths = write_designs(designs, args.out)
    print_summary(designs, paths)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    load_dotenv()
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    if args.command == "templates":
        print_templates()
        return EXIT_OK
    if args.command == "check-config":
        return check_config(args.config)

    try:
        return asyncio.run(run_design(args))
    except AllCandidatesFailed as e:
        console.print(f"❌ {e}", style="red")
        for name, reason in e.rejections.items():
            console.print(f"  • {name}: {reason}", style="dim")
        return EXIT_ALL_FAILED
    except (ConfigurationError, ValidationError, ValueError, OSError) as e:
        console.print(f"⚠️ {e}", style="yellow")
        return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
