"""Protocol constants.

Keep these in one place to avoid stringly-typed message handling.
"""

# Outbound actions
RENDER = "render"
PATCH = "patch"
WARN = "warn"
DESTROY = "destroy"
COMPLETE = "complete"
GROUP_COMPLETE = "groupComplete"
UPDATE_PEERS = "updatePeers"

# Inbound actions
START_SESSION = "startSession"
RESOLVE = "resolve"
# PATCH is shared by both directions.

# Correlation phases
PHASE_RESOLVE = "resolve"
PHASE_PATCH = "patch"
PHASE_GROUP = "groupComplete"

# Keep-alive token, written raw rather than as JSON.
HEARTBEAT = b"ping"

# Identifier prefixes
FIELD_PREFIX = "field"
GROUP_PREFIX = "group"
