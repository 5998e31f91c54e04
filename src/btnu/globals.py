class Globals:
    DEFAULT_CONFIG_FILE = "~/.config/btnu/config.yaml"
    DEFAULT_GROUP = "DIRECTORIES"
    REQUIRED_SYSTEM_BINS = ["rsync", "ssh", "ping"]
    PING_TIMEOUT = 2
    RSYNC_OPTIONS = ["-avzhPp"]
    TARGETS = ["onsite", "offsite", "both"]
