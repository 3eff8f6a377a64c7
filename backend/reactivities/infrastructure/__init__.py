"""Infrastructure — database sessions, identity tokens, repositories, logging.

Invariants:
    - Everything here performs IO; core/ never imports from this package
"""
