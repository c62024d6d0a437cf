"""tasktrack — task/user record manager over HTTP.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
