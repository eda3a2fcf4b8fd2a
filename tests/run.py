"""Convenience test runner for local development.

Usage:
    python tests/run.py                 # run all tests with -q
    python tests/run.py -v              # verbose
    python tests/run.py --seed-prompts  # import the public collection instead
"""
import sys
import pytest
from pathlib import Path

# Ensure project root is on sys.path so imports work when running this script directly
project_root = Path(__file__).resolve().parents[1]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


def run_seed_prompts(language=None):
    # Import lazily to avoid app import side-effects when not seeding
    from app import create_app
    from app.seeds.seed_prompts import run as seed_run

    app = create_app('development')
    result = seed_run(app, language=language, create_tables_if_missing=True)
    print('seed_prompts result:', result)
    return 0


def main(argv=None):
    argv = argv or sys.argv[1:]
    if '--seed-prompts' in argv:
        rest = [a for a in argv if a != '--seed-prompts']
        return run_seed_prompts(rest[0] if rest else None)
    args = ['-q']
    if '-v' in argv or '--verbose' in argv:
        args = []
    # Pass remaining args through to pytest
    extra = [a for a in argv if a not in ('-v', '--verbose')]
    args.extend(extra)

    return pytest.main(args)


if __name__ == '__main__':
    rc = main()
    sys.exit(rc)
