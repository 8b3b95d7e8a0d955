"""
Core module - configuration, logging, auth helpers and domain errors.
"""
