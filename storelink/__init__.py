"""
storelink
REST extensions for an online store and a ricardo.ch listing publisher
"""

__version__ = "1.0.0"
