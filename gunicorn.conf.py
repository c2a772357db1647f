import os

# Bind to the port provided via the PORT environment variable, defaulting to
# 5000.
bind = f"0.0.0.0:{os.getenv('PORT', '5000')}"

# Eventlet workers keep the Socket.IO connections that push cache
# invalidations to open dashboards.
worker_class = "eventlet"

# Socket.IO sessions live in one worker's memory, and long-lived connections
# must not trip the worker timeout.
workers = 1
timeout = 0
