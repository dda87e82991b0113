"""
Redis key and stream names used by the elevator simulator.
"""

# Stream carrying new pick-up/drop-off requests to the simulation loop
ELEVATOR_REQUESTS_STREAM = "elevator:requests:stream"
