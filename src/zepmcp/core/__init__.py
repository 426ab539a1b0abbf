"""
Core building blocks: configuration, exceptions, logging, transfer models and
the Zep memory client.
"""
