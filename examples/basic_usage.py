#!/usr/bin/env python3
"""
Example: Filtering findings from inside a lint host
"""

from lintscope import LazySession

# One session per analysis run; git is consulted on the first query
session = LazySession("/path/to/project")

findings = [
    ("HardcodedText", "/path/to/project/src/main/Old.java", 12),
    ("HardcodedText", "/path/to/project/src/main/New.java", 40),
    ("UnusedImport", "/path/to/project/src/main/Old.java", 3),
]

for rule_id, path, line in findings:
    if session.should_report(rule_id, path):
        print(f"{path}:{line}: {rule_id}")

active = session.get()
print(f"Baseline: {active.baseline or 'none'} ({'active' if active.active else 'reporting everything'})")
