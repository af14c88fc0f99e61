"""
Payments module.

Settles open orders by cash or transfer and frees their tables.
"""
