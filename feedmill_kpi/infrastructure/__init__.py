"""
Infrastructure Layer Package

Record store implementations (MongoDB, in-memory snapshot) and the health
check of the store.
"""
