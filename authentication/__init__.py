"""
Authentication feature.

The app lock: PIN creation and reset, PIN and biometric unlock, logout when
the main window goes to the background.
"""
