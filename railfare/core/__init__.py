"""
Core Package

Models, interfaces and services for the fare and schedule engine.
"""
