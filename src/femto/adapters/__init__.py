"""Hosts that drive the editor engine."""
