"""Core application infrastructure: settings, errors, logging, dependencies"""
