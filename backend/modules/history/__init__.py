"""
History module.

Daily payment history and bill details of settled orders.
"""
