# Network
LOG_NET_ATTEMPT = "Connecting to {host}:{port}..."
LOG_NET_ESTABLISHED = "Connection established."
LOG_NET_CLOSED_REMOTE = "Connection closed by remote host."
LOG_NET_CLOSED_LOCAL = "Connection closed."
LOG_NET_PONG = "Answered server PING."

# Errors
LOG_ERROR_CONNECT_REFUSED = "Connection refused by {host}."
LOG_ERROR_CONNECT_FAIL = "Failed to connect: {error}"
LOG_ERROR_NOT_CONNECTED = "Cannot send, not connected."
LOG_ERROR_SEND_FAIL = "Failed to send data: {error}"
LOG_ERROR_READ_FAIL = "Failed to read data: {error}"

# Core
LOG_READY_MOTD = "End of MOTD received, registration complete."
LOG_READY_PROTOCOL = "Joining configured channels."
LOG_LOOP_ENDED = "Main loop ended."
LOG_CORE_KILLED = "Shutdown requested by {author}."
LOG_CORE_NICK_SENT = "Sent NICK/USER registration as {nick}."

# Messages
LOG_MESSAGE_BUILD_FAIL = "Dropped {verb} response for {target}: {error}"
LOG_MESSAGE_UNPARSED = "Ignoring unparseable line: {line}"

# Dispatch
LOG_DISPATCH_COMMAND = "Dispatching {command_name} from {author} to '{plugin}'."
LOG_DISPATCH_EVENT = "Dispatching {verb} to '{plugin}'."
LOG_DISPATCH_PLUGIN_ERROR = "Plugin '{plugin}' failed on {command_name}: {error}"
LOG_DISPATCH_TRUNCATED = "Dropped {dropped} responses over the limit of {limit}."

# Registry
LOG_REGISTRY_OVERWRITTEN = "Command '{name}' already registered by '{old}', now handled by '{new}'."

# Plugins
LOG_PLUGIN_LOAD = "Loading plugin module {module_name}..."
LOG_PLUGIN_LOADED = "Plugin '{plugin}' loaded with commands [{commands}] and events [{events}]."
LOG_PLUGIN_ALREADY_LOADED = "Plugin '{plugin}' is already loaded."
LOG_PLUGIN_NOT_LOADED = "Plugin '{plugin}' is not loaded."
LOG_PLUGIN_NO_SETUP = "Module {module_name} has no setup() function."
LOG_PLUGIN_UNLOADED = "Plugin '{plugin}' unloaded."
LOG_PLUGIN_REBUILD = "Rebuilding {count} plugins."
LOG_PLUGIN_INIT_FAIL = "Plugin '{plugin}' failed to re-initialize, keeping its commands: {error}"
LOG_PLUGIN_CLOSE_FAIL = "Plugin '{plugin}' failed to close: {error}"

# Permissions
LOG_PERM_GRANTED = "{author} allowed to run {funcname}."
LOG_PERM_DENIED = "{author} is not allowed to run {funcname}."

# Pools
LOG_POOL_SCAN_FAIL = "Error scanning {directory} for map pools: {error}"
LOG_POOL_FILE_FAIL = "{location}: Error loading maps: {error}"
LOG_POOL_LINE_TOO_LONG = "{location}:{lineno} was too long to load."
LOG_POOL_LINE_UNTERMINATED = "{location}:{lineno} has no line ending, ignored."
LOG_POOL_LINE_BLANK = "{location}:{lineno} blank line ignored."
LOG_POOL_TOO_MANY_MAPS = "{location}: more than {limit} maps; truncating remaining maps."
LOG_POOL_EMPTY = "{location} had no maps listed."
LOG_POOL_CREATED = "Created pool {name} with {count} maps."
LOG_POOL_TOO_MANY = "Too many map pools; dropping {dropped}."
LOG_POOL_LOADED = "Loaded {count} map pools ({maps} maps) from {directory}."
LOG_POOL_RELOAD_FAIL = "Map pool reload failed, keeping {count} previous pools: {error}"
