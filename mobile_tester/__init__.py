"""Mobile Tester - Appium-driven login flow suite for a single Android app"""

__version__ = "1.0.0"
