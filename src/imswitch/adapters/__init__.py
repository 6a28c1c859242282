"""Adapters hosting imswitch inside concrete UIs."""
