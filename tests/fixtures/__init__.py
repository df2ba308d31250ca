"""Test fixtures: canned API responses and mock transport helpers."""
