"""Core infrastructure: configuration, database and caller identity"""
