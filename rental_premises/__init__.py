"""
Rental Premises API: listings of rental premises with photos and an admin approval workflow.
"""

__version__ = "1.0.0"
