"""
Organization module.

Multi-tenant organizations with role-based membership, plus the teams and
applications that live inside them.
"""
