"""Application services for the miniship CLI.

Services implement release operations on top of core/ and drive external
systems only through the interfaces in services/release/collaborators.py.
"""
