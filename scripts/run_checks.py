from __future__ import annotations

from pathlib import Path
import py_compile
import subprocess
import sys


ROOT = Path(__file__).resolve().parents[1]
EXCLUDED_DIRS = {'build', 'dist', '__pycache__', '.git'}
REGRESSION_SCRIPTS = [
    ('Color math regression', 'color_math_regression.py'),
    ('Sampler regression', 'sampler_regression.py'),
    ('Viewport regression', 'viewport_regression.py'),
    ('Palette store regression', 'palette_store_regression.py'),
    ('Crop session regression', 'crop_session_regression.py'),
    ('Session regression', 'session_regression.py'),
    ('Export regression', 'export_regression.py'),
    ('Runtime regression', 'runtime_regression.py'),
]


def iter_python_files(root: Path):
    for path in root.rglob('*.py'):
        rel_parts = path.relative_to(root).parts
        if any(part in EXCLUDED_DIRS for part in rel_parts):
            continue
        yield path


def compile_check() -> bool:
    print('== Compile check ==', flush=True)
    ok = True
    for py_file in sorted(iter_python_files(ROOT)):
        try:
            py_compile.compile(str(py_file), doraise=True)
        except Exception as exc:
            ok = False
            rel = py_file.relative_to(ROOT)
            print(f'FAIL compile: {rel} -> {exc}')
    if ok:
        print('PASS compile', flush=True)
    return ok


def _run_script(label: str, script_path: Path) -> bool:
    print(f'\n== {label} ==', flush=True)
    cmd = [sys.executable, str(script_path)]
    completed = subprocess.run(cmd, cwd=str(ROOT))
    return completed.returncode == 0


def regression_check() -> bool:
    results = [_run_script(label, ROOT / 'tests' / name) for label, name in REGRESSION_SCRIPTS]
    return all(results)


def main() -> int:
    ok_compile = compile_check()
    ok_regression = regression_check() if ok_compile else False

    print('\n== Summary ==')
    print(f'compile: {"PASS" if ok_compile else "FAIL"}')
    print(f'regression: {"PASS" if ok_regression else "FAIL"}')
    return 0 if (ok_compile and ok_regression) else 1


if __name__ == '__main__':
    raise SystemExit(main())
