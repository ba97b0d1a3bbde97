#!/usr/bin/env python3
"""Pick a random background color."""

import json
import random

COLORS = ["black", "white", "red", "green", "blue", "yellow", "cyan", "magenta", "silver", "orange"]

color = random.choice(COLORS)
print(json.dumps({"title": f"[[{color}]]", "color": color}))
