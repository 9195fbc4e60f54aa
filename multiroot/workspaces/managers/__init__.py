"""Recently opened history.

Functions here are pure: they convert between storage data and
``RecentlyOpened`` or derive an updated ``RecentlyOpened`` from an existing
one.  Persisting the result is the store's responsibility.
"""
