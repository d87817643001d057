"""
Authentication module for the hospital management system.

This module provides:
- Patient self-registration
- Email/password login returning a signed bearer token
- Current-user lookup from a bearer token
"""
