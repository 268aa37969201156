"""
Activations module - License registration with the activation server.

This module handles:
- Registration of issued licenses (client side)
- Storage of received registrations (server side)
- Install policy per license
"""
