"""Top‑level package for the checkout simulator.

This package exposes the business logic via :mod:`checkout_sim.app`, the
product catalogue in :mod:`checkout_sim.catalog`, the shopping cart in
:mod:`checkout_sim.cart`, the order ledger in :mod:`checkout_sim.ledger`
and the mock payment methods in :mod:`checkout_sim.payment_service`.
The interactive console front end lives in :mod:`checkout_sim.cli`.
"""

__version__ = "1.0.0"
