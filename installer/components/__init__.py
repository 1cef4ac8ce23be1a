"""
Component modules for the installer.

This package contains all the component modules for the installer.
Each component lives in its own directory and provides installation and
configuration of one part of the desktop.
"""
