"""
Shared Module
=============

Event bus, configuration and logging used across asyncctl.
"""
