"""
Appointment API

A FastAPI service storing users and appointments in MongoDB and
serving the client bundle that talks to it.
"""

__version__ = "1.0.0"
