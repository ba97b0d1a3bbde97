#!/usr/bin/env python3
"""Show whether a git working tree has uncommitted changes."""

import json
import os
import subprocess
import sys

try:
    repo = os.path.expanduser(sys.argv[1])
    status = subprocess.run(
        ["git", "status", "--porcelain"], cwd=repo, capture_output=True, text=True, check=True
    ).stdout.strip()

    if not status:
        print(json.dumps({"title": "Clean", "color": "green"}))
    else:
        changes = len(status.splitlines())
        print(json.dumps({"title": f"{changes} changes", "color": "orange"}))
except (IndexError, OSError, subprocess.CalledProcessError):
    print(json.dumps({"title": "Not a repo", "color": "gray"}))
