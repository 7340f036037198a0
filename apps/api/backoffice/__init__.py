"""
Restaurant back-office: menu, orders and reservations.
"""
__version__ = "0.1.0"
