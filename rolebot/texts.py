"""
Text messages used by the reaction role bot.
"""

# Operator commands
PING_COMMAND = "!ping"
REACTION_MESSAGE_COMMAND = "!reaction-message"

# Command responses
PING_RESPONSE = "Pong!"
REACTION_MESSAGE_HEADER = (
    "React to this message to auto-assign a role to yourself\n"
    "See the list below for which reactions assign which roles.\n"
)
REACTION_MESSAGE_LINE = "{emoji} => {role}"

# Reaction handling log messages
LOG_USER_NOT_SPECIFIED = "User is not specified in reaction"
LOG_UNKNOWN_EMOJI = "Role name could not be identified by the reaction given."
LOG_NO_GUILD = "Unable to get Guild"
LOG_ROLE_NOT_FOUND = "Unable to find a role named {role} on the server"
LOG_ROLE_ASSIGNED = "Assigned role {role} to {user_id}"
LOG_ROLE_REMOVED = "Removed role {role} from {user_id}"
LOG_ROLE_UPDATE_FAILED = "Failed to update role {role} for {user_id}: {error}"
