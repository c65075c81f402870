"""
Smart tank dashboard: water level display and pump motor control via Blynk
"""
__version__ = '1.0.0'
