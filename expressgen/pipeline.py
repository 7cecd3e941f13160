"""expressgen pipeline orchestrator.

Runs one scaffold from a validated :class:`FeatureSelection`:

1. resolve and create the project directory
2. create the canonical folder skeleton
3. compose and write every artifact
4. load, merge and write ``package.json``
5. run the package installer

Every step after validation is best-effort: a failing file is reported and
the run carries on; nothing already written is rolled back.

Usage::

    expressgen                 # interactive
    expressgen --defaults -o ./services --name billing
    python -m expressgen.pipeline --version
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from pathlib import Path

from expressgen.config import CURRENT_DIR, Config, FeatureSelection
from expressgen.errors import FileSystemError, ValidationError
from expressgen.installer import NpmInstaller
from expressgen.prompts import collect_selection, default_answers
from expressgen.scaffolder import DirectoryBuilder, FileWriter, ManifestMerger, TemplateComposer
from expressgen.scaffolder.manifest import (
    MANIFEST_NAME,
    LoadStatus,
    default_manifest,
    dump_manifest,
    load_manifest,
)
from expressgen.scaffolder.models import BUILD_DIR, ENTRY_NAME, SOURCE_DIR
from expressgen.scaffolder.writer import WriteResult
from expressgen.utils import (
    console,
    fetch_latest_version,
    print_banner,
    print_error,
    print_info,
    print_summary_table,
    print_warning,
)


@dataclass
class ScaffoldReport:
    """What one run did."""

    project_dir: Path
    directories: dict[str, bool] = field(default_factory=dict)
    written: list[Path] = field(default_factory=list)
    failed: list[FileSystemError] = field(default_factory=list)
    manifest_status: str = "skipped"
    installed: bool | None = None

    @property
    def success(self) -> bool:
        return not self.failed and all(self.directories.values())


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class Pipeline:
    """Drives a single scaffolding run.

    Attributes:
        config: Run settings.
        installer: Invoked once after the manifest is written (when enabled).
    """

    def __init__(self, config: Config | None = None, installer: NpmInstaller | None = None) -> None:
        self.config = config or Config()
        self.installer = installer or NpmInstaller(self.config.install_command)

    def run(self, selection: FeatureSelection) -> ScaffoldReport:
        project_dir = self.config.project_dir(selection)
        report = ScaffoldReport(project_dir=project_dir)
        writer = FileWriter()

        try:
            project_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            report.failed.append(FileSystemError(project_dir, exc.strerror or str(exc)))
            print_error(f"Error creating {project_dir}: {exc.strerror or exc}")

        builder = DirectoryBuilder()
        report.directories = builder.build(project_dir)

        for artifact in TemplateComposer(selection).compose():
            writer.write(project_dir / artifact.relative_path, artifact.content)

        report.manifest_status = self._write_manifest(project_dir, selection, writer)

        report.written = writer.written
        report.failed.extend(r.error for r in writer.failed if r.error is not None)
        report.failed.extend(builder.errors)

        if self.config.install:
            report.installed = self.installer.install(project_dir)

        self._print_summary(selection, report)
        return report

    # -- Manifest ----------------------------------------------------------

    def _write_manifest(self, project_dir: Path, selection: FeatureSelection, writer: FileWriter) -> str:
        """Merge and write ``package.json``; returns a short status label."""
        path = project_dir / MANIFEST_NAME
        try:
            loaded = load_manifest(path)
        except OSError as exc:
            writer.results.append(WriteResult(path, FileSystemError(path, exc.strerror or str(exc))))
            print_error(f"Error reading {path}: {exc.strerror or exc}")
            return "unreadable"

        if loaded.status is LoadStatus.MALFORMED:
            print_error(str(loaded.error))
            if self.config.manifest_parse_policy == "keep":
                print_warning(f"Leaving {path} untouched; fix it and re-run to add scripts and dependencies.")
                return "malformed (kept)"
            print_warning(f"Replacing {path} with a fresh manifest; its previous content is discarded.")

        base = loaded.data if loaded.status is LoadStatus.LOADED else default_manifest(project_dir, selection)
        merged = ManifestMerger(selection).merge(base)
        verb = "Updated" if loaded.status is LoadStatus.LOADED else "Created"
        result = writer.write(path, dump_manifest(merged), verb=verb)
        if not result.ok:
            return "failed"
        if loaded.status is LoadStatus.MALFORMED:
            return "malformed (replaced)"
        return verb.lower()

    # -- Reporting ---------------------------------------------------------

    def _print_summary(self, selection: FeatureSelection, report: ScaffoldReport) -> None:
        install = {None: "skipped", True: "ok", False: "failed"}[report.installed]
        print_summary_table(
            {
                "Project directory": str(report.project_dir),
                "Files written": str(len(report.written)),
                "Failures": str(len(report.failed)),
                "package.json": report.manifest_status,
                "Install": install,
            },
            title="Scaffold",
        )

        if selection.is_typescript:
            print_info(f"To run the server, use: npm run build && node {BUILD_DIR}/{ENTRY_NAME}.js")
        else:
            print_info(f"To run the server, use: node {SOURCE_DIR}/{ENTRY_NAME}.js")
        if selection.nodemon or selection.is_typescript:
            print_info("To run the server in development mode, use: npm run dev")
        if selection.database:
            print_info("Don't forget to update the DB URL in the .env file :)")


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="expressgen",
        description="Scaffold an Express server (TypeScript or JavaScript)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  expressgen\n"
            "  expressgen --name my-api -o ./services\n"
            "  expressgen --defaults --no-install\n"
        ),
    )
    parser.add_argument(
        "-v", "--version",
        action="store_true",
        help="Print the latest published version and exit",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Directory the project is created in (default: current directory)",
    )
    parser.add_argument(
        "--name",
        default=None,
        help="Project folder name; '.' scaffolds into the output directory itself",
    )
    parser.add_argument(
        "--defaults",
        action="store_true",
        help="Skip the prompts and use the default answers",
    )
    parser.add_argument(
        "--no-install",
        action="store_true",
        help="Do not run the package installer",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``expressgen`` and ``python -m expressgen.pipeline``."""
    args = build_parser().parse_args(argv)

    try:
        config = Config.from_env()
        if args.version:
            url = config.version_url.format(package=config.package_name)
            version = fetch_latest_version(url, timeout=config.version_timeout)
            console.print(version or "null", highlight=False)
            return
        if args.output is not None:
            config.output_dir = Path(args.output)
        if args.no_install:
            config.install = False

        print_banner()
        if args.defaults:
            name = args.name if args.name is not None else CURRENT_DIR
            selection = FeatureSelection.from_answers(default_answers(name))
        else:
            selection = collect_selection(args.name)
        Pipeline(config).run(selection)
    except ValidationError as exc:
        print_error(f"Invalid selection: {exc}")
        sys.exit(1)
    except KeyboardInterrupt:
        print_warning("Aborted.")
        sys.exit(130)
    except Exception as exc:
        print_error(f"Unhandled error: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
