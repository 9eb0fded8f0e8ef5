"""
This package contains all modules related to parsing and decoding data
received from the message queue.

Sub-packages handle specific data formats:

- ``nbfx``: Binary element encoding used for queue message bodies.
"""
