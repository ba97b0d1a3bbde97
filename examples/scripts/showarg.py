#!/usr/bin/env python3
"""Show one of the arguments: showarg.py N ARG... prints ARG number N (wrapping)."""

import json
import sys

n = int(sys.argv[1]) if len(sys.argv) > 1 else 0
args = sys.argv[2:]
title = args[n % len(args)] if args else ""

print(json.dumps({"title": title}))
