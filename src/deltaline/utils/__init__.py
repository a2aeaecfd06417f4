"""Logging helpers for DELTALINE."""
