"""Kernel – errors and time, shared by every export layer."""
