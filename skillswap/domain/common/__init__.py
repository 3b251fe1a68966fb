"""Shared domain building blocks: entity base, errors, query specs, ports."""
