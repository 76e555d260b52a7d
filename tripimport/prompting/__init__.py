"""Prompting package.

This package holds the fixed instruction texts for both paste-import variants and
the helpers that assemble the provider `contents` list. It does not perform
validation, configuration lookup, or model invocation.
"""
