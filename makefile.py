#!/usr/bin/env python3
"""
makefile.py - Developer task runner for boxspace.

Usage:
    python makefile.py <target>

Requires: pip install -e .[dev]
"""

import shutil
import subprocess
import sys
from pathlib import Path

from colorama import Fore, Style
from colorama import init as _colorama_init

_colorama_init(autoreset=True)

ROOT = Path(__file__).parent


def print_header(title):
    bar = Fore.CYAN + Style.BRIGHT + "=" * 52 + Style.RESET_ALL
    label = Fore.CYAN + Style.BRIGHT + f"  {title}" + Style.RESET_ALL
    print(f"\n{bar}\n{label}\n{bar}")


def print_step(msg):
    print(f"{Fore.YELLOW}-->{Style.RESET_ALL} {msg}")


def print_success(msg):
    print(f"{Fore.GREEN}[OK]{Style.RESET_ALL} {msg}")


def run_cmd(args, allow_failure=False):
    """
    Run a command as a subprocess, streaming output directly to the terminal.
    Exits with the subprocess exit code on failure unless allow_failure=True.
    """
    try:
        result = subprocess.run(args, cwd=ROOT)
    except FileNotFoundError:
        print(f"{Fore.RED}[ERROR]{Style.RESET_ALL} Command not found: '{args[0]}'")
        if not allow_failure:
            sys.exit(127)
        return 127
    if result.returncode != 0 and not allow_failure:
        sys.exit(result.returncode)
    return result.returncode


def target_test():
    print_header("Running All Tests")
    run_cmd([sys.executable, "-m", "pytest", "-v"])


def target_test_space():
    print_header("Running Space and Index Tests")
    run_cmd([sys.executable, "-m", "pytest", "-v", "tests/test_space", "tests/test_index"])


def target_test_coverage():
    print_header("Running Tests with Coverage")
    run_cmd([sys.executable, "-m", "pytest", "--cov=boxspace", "--cov-report=term-missing"])


def target_demo():
    print_header("Running the non-unique TREE index scenario")
    run_cmd([
        sys.executable, "-m", "boxspace.main",
        "--config", "examples/nonunique_tree.cfg",
        "examples/nonunique_tree.txt",
    ], allow_failure=True)


def target_example():
    print_header("Running the index walkthrough")
    run_cmd([sys.executable, "examples/index_example.py"])


def target_clean():
    print_header("Cleaning caches")
    for path in [ROOT / ".pytest_cache", ROOT / ".coverage", *ROOT.rglob("__pycache__")]:
        if path.is_dir():
            shutil.rmtree(path, ignore_errors=True)
        elif path.exists():
            path.unlink()
        print_step(f"Removed {path.relative_to(ROOT)}")
    print_success("Clean")


TARGETS = {
    "test": (target_test, "Run all tests"),
    "test-space": (target_test_space, "Run space and index tests only"),
    "test-coverage": (target_test_coverage, "Run tests with coverage"),
    "demo": (target_demo, "Run the sample config and command script"),
    "example": (target_example, "Run examples/index_example.py"),
    "clean": (target_clean, "Remove pytest and bytecode caches"),
}


def target_help():
    title = Fore.CYAN + Style.BRIGHT + "boxspace - Available Commands" + Style.RESET_ALL
    print(f"\n{title}\n")
    for name, (_, desc) in TARGETS.items():
        print(f"  {Fore.GREEN}{name.ljust(16)}{Style.RESET_ALL}  {desc}")
    print()


def main():
    if len(sys.argv) < 2 or sys.argv[1] == "help":
        target_help()
        sys.exit(0)

    name = sys.argv[1]
    if name not in TARGETS:
        print(f"{Fore.RED}[ERROR]{Style.RESET_ALL} Unknown target: '{name}'")
        print("  Run:  python makefile.py help  to list all available targets.")
        sys.exit(1)

    func, _ = TARGETS[name]
    func()


if __name__ == "__main__":
    main()
