"""Networking helpers: IP addresses, host names, status values and sockets."""