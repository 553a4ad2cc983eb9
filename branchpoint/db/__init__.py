"""Database models and enumerations"""
