from __future__ import annotations

import sys
from pathlib import Path

# Make ``import secant_tangent`` work from a source checkout without installing.
_here = Path(__file__).resolve().parent
_package_dir = _here
while _package_dir != _package_dir.parent and not (_package_dir / "__init__.py").exists():
    _package_dir = _package_dir.parent

if str(_package_dir.parent) not in sys.path:
    sys.path.insert(0, str(_package_dir.parent))
