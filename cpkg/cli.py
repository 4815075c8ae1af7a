# SPDX-License-Identifier: MIT
"""Command-line interface for cpkg."""

from __future__ import annotations

import argparse
import logging
import shutil
import subprocess
import sys
from pathlib import Path

from cpkg.configure.config import CONFIG_FILE, find_config, load_project_file
from cpkg.core.errors import CpkgError
from cpkg.generators.ninja import MANIFEST_NAME, NinjaGenerator
from cpkg.tools.toolchain import VARIANTS

# Set up logging
logger = logging.getLogger("cpkg")

CONFIG_TEMPLATE = """\
# cpkg project file.
#
# Each [[project]] is compiled from source; each [[dependency]] is a
# pre-built library projects can link against.

[[project]]
name = "{name}"
version = "1.0.0"
type = "executable"           # executable, static, shared or object
source_dirs = ["src"]
include_dirs = ["include"]
dependencies = []
cflags = ""
cxxflags = ""
ldflags = ""

# Flags handed to projects that depend on this one.
[project.export]
cflags = ""

# [[dependency]]
# name = "z"
# libraries = ["/usr/lib/libz.a"]
# include_dirs = []
"""


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity level."""
    if debug:
        level = logging.DEBUG
        fmt = "%(levelname)s: %(name)s: %(message)s"
    elif verbose:
        level = logging.INFO
        fmt = "%(levelname)s: %(message)s"
    else:
        level = logging.WARNING
        fmt = "%(levelname)s: %(message)s"

    logging.basicConfig(level=level, format=fmt)


def run_ninja(
    project_dir: Path,
    targets: list[str] | None = None,
    jobs: int | None = None,
    verbose: bool = False,
    tool: str | None = None,
) -> int:
    """Run ninja on the manifest in a project directory.

    Args:
        project_dir: Directory containing build.ninja.
        targets: Targets to build (default: everything).
        jobs: Parallel job count passed as -j.
        verbose: Show full command lines.
        tool: Ninja subtool to run instead of building (e.g. 'clean').

    Returns:
        Exit code from ninja, or 1 if it could not be started.
    """
    if not (project_dir / MANIFEST_NAME).exists():
        logger.error("No %s found in %s", MANIFEST_NAME, project_dir)
        logger.info("Run 'cpkg generate' first to create it")
        return 1

    ninja = shutil.which("ninja")
    if ninja is None:
        logger.error("ninja not found in PATH")
        logger.info("Install ninja: https://ninja-build.org/")
        return 1

    cmd = [ninja, "-C", str(project_dir)]
    if jobs:
        cmd += ["-j", str(jobs)]
    if verbose:
        cmd.append("-v")
    if tool:
        cmd += ["-t", tool]
    cmd += targets or []

    logger.info("Running: %s", " ".join(cmd))
    try:
        return subprocess.run(cmd).returncode
    except OSError as e:
        logger.error("Could not start ninja: %s", e)
        return 1


def _load_generator(args: argparse.Namespace) -> NinjaGenerator | None:
    """Load cpkg.toml and register its contents with a new generator."""
    project_dir = Path(args.dir)
    config_path = find_config(project_dir)
    if config_path is None:
        logger.error("No %s found in %s", CONFIG_FILE, project_dir)
        logger.info("Create one with 'cpkg init'")
        return None

    project_file = load_project_file(
        config_path, toolchain=getattr(args, "toolchain", None)
    )
    generator = NinjaGenerator(
        root_dir=project_dir, variant=getattr(args, "variant", None)
    )
    project_file.register_all(generator)
    return generator


def cmd_default(args: argparse.Namespace) -> int:
    """Default command: generate and build.

    This is what runs when you just type 'cpkg' with no subcommand.
    Equivalent to: cpkg generate && cpkg build
    """
    result = cmd_generate(args)
    if result != 0:
        return result

    return cmd_build(args, generate=False)


def cmd_generate(args: argparse.Namespace) -> int:
    """Generate build.ninja from cpkg.toml.

    The manifest is only rewritten when its content changes.
    """
    setup_logging(args.verbose, args.debug)

    try:
        generator = _load_generator(args)
        if generator is None:
            return 1
        written = generator.generate()
    except CpkgError as e:
        logger.error("%s", e)
        return 1

    manifest = generator.manifest_path
    print(f"Generated {manifest}" if written else f"{manifest} is up to date")
    return 0


def cmd_build(args: argparse.Namespace, generate: bool = True) -> int:
    """Build targets using ninja.

    Regenerates build.ninja first unless told not to.
    """
    setup_logging(args.verbose, args.debug)

    if generate:
        result = cmd_generate(args)
        if result != 0:
            return result

    return run_ninja(
        Path(args.dir),
        targets=getattr(args, "targets", None) or None,
        jobs=getattr(args, "jobs", None),
        verbose=args.verbose,
    )


def cmd_clean(args: argparse.Namespace) -> int:
    """Clean build artifacts with 'ninja -t clean'."""
    setup_logging(args.verbose, args.debug)

    project_dir = Path(args.dir)
    if not (project_dir / MANIFEST_NAME).exists():
        logger.info("No %s in %s, nothing to clean", MANIFEST_NAME, project_dir)
        return 0

    return run_ninja(project_dir, verbose=args.verbose, tool="clean")


def cmd_info(args: argparse.Namespace) -> int:
    """Show the projects and dependencies declared in cpkg.toml."""
    setup_logging(args.verbose, args.debug)

    config_path = find_config(Path(args.dir))
    if config_path is None:
        logger.error("No %s found in %s", CONFIG_FILE, args.dir)
        return 1

    try:
        project_file = load_project_file(
            config_path, toolchain=getattr(args, "toolchain", None)
        )
    except CpkgError as e:
        logger.error("%s", e)
        return 1

    print(f"Project file: {config_path}")
    print()
    for project in project_file.projects:
        print(project.describe())
        print()
    for dependency in project_file.dependencies:
        print(f"Dependency: {dependency.name} version {dependency.version}")
        print(f"Libraries: {', '.join(dependency.library_paths)}")
        print(f"Include Directories: {', '.join(dependency.include_dirs)}")
        print()

    return 0


def cmd_init(args: argparse.Namespace) -> int:
    """Initialize a new cpkg project.

    Creates a template cpkg.toml file.
    """
    setup_logging(args.verbose, args.debug)

    project_dir = Path(args.dir)
    config_path = project_dir / CONFIG_FILE

    if config_path.exists() and not args.force:
        logger.error("%s already exists (use --force to overwrite)", config_path)
        return 1

    name = project_dir.resolve().name.replace(" ", "_") or "app"
    project_dir.mkdir(parents=True, exist_ok=True)
    config_path.write_text(CONFIG_TEMPLATE.format(name=name))
    logger.info("Created %s", config_path)

    print("Project initialized!")
    print("Next steps:")
    print(f"  1. Edit {CONFIG_FILE} to describe your projects")
    print("  2. Run 'cpkg' to build")

    return 0


def add_common_args(parser: argparse.ArgumentParser, subcommand: bool = False) -> None:
    """Add common arguments to a parser.

    Subcommand parsers leave unset options out of the namespace, so a
    value given before the subcommand (e.g. 'cpkg -C proj generate') is
    kept.
    """
    unset = {"default": argparse.SUPPRESS} if subcommand else {}
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Verbose output", **unset
    )
    parser.add_argument("--debug", action="store_true", help="Debug output", **unset)
    parser.add_argument(
        "-C",
        "--dir",
        default=argparse.SUPPRESS if subcommand else ".",
        help="Project directory containing cpkg.toml (default: .)",
    )


def add_generate_args(
    parser: argparse.ArgumentParser, subcommand: bool = False
) -> None:
    """Add arguments for generate-related commands."""
    unset = {"default": argparse.SUPPRESS} if subcommand else {}
    parser.add_argument(
        "--variant",
        choices=VARIANTS,
        help="Build variant (adds debug or release compile flags)",
        **unset,
    )
    parser.add_argument(
        "--toolchain",
        metavar="NAME",
        help="Toolchain for projects that do not name one (gcc, clang, msvc)",
        **unset,
    )


def main() -> int:
    """Main entry point for the cpkg CLI."""
    parser = argparse.ArgumentParser(
        prog="cpkg",
        description="A project manager for C/C++ that generates Ninja files.",
        epilog="Run 'cpkg <command> --help' for command-specific help.",
    )
    from cpkg import __version__

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    # Default command args (for 'cpkg' with no subcommand)
    add_common_args(parser)
    add_generate_args(parser)
    parser.add_argument(
        "-j", "--jobs", type=int, help="Number of parallel jobs for build"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # cpkg info
    info_parser = subparsers.add_parser(
        "info", help="Show the projects declared in cpkg.toml"
    )
    add_common_args(info_parser, subcommand=True)
    info_parser.add_argument(
        "--toolchain",
        metavar="NAME",
        default=argparse.SUPPRESS,
        help="Default toolchain to report",
    )
    info_parser.set_defaults(func=cmd_info)

    # cpkg init
    init_parser = subparsers.add_parser("init", help="Create a cpkg.toml template")
    init_parser.add_argument(
        "-f", "--force", action="store_true", help="Overwrite existing files"
    )
    add_common_args(init_parser, subcommand=True)
    init_parser.set_defaults(func=cmd_init)

    # cpkg generate
    gen_parser = subparsers.add_parser(
        "generate", help="Generate build.ninja from cpkg.toml"
    )
    add_common_args(gen_parser, subcommand=True)
    add_generate_args(gen_parser, subcommand=True)
    gen_parser.set_defaults(func=cmd_generate)

    # cpkg build
    build_parser = subparsers.add_parser(
        "build", help="Generate build.ninja and build targets using ninja"
    )
    add_common_args(build_parser, subcommand=True)
    add_generate_args(build_parser, subcommand=True)
    build_parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=argparse.SUPPRESS,
        help="Number of parallel jobs",
    )
    build_parser.add_argument("targets", nargs="*", help="Targets to build")
    build_parser.set_defaults(func=cmd_build)

    # cpkg clean
    clean_parser = subparsers.add_parser("clean", help="Clean build artifacts")
    add_common_args(clean_parser, subcommand=True)
    clean_parser.set_defaults(func=cmd_clean)

    args = parser.parse_args()

    # Handle default command (no subcommand specified)
    if args.command is None:
        return cmd_default(args)

    # Run the specified command
    result: int = args.func(args)
    return result


if __name__ == "__main__":
    sys.exit(main())
