"""Core analysis modules.

WHY: The core package holds the only part of the app with real logic,
turning a transcript into a fluency assessment. It is kept free of any I/O
so it can be called from anywhere.

HOW: models.py defines the input and result dataclasses, analyzer.py
detects and scores disfluencies, matching.py scores how much of an
expected phrase was spoken.

RULES:
- Everything here is pure: no file, network, or global state
- models.py dataclasses are the contract with formatters and the CLI
"""
