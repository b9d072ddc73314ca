"""
Cache package for the Cache Service.

Provides the backend contract and two interchangeable implementations:
a process-local store guarded by a reader/writer lock with lazy expiry
plus a periodic sweep, and a Redis adapter that relies on native key
expiry. Exactly one backend is selected at startup by the factory.
"""
