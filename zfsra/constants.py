# Copyright (C) 2026 zfsra developers
# See COPYING for license information.
'''
OCF return codes, action names and ZFS tool vocabulary.
'''

# OCF return codes
OCF_SUCCESS = 0
OCF_ERR_GENERIC = 1
OCF_ERR_ARGS = 2
OCF_ERR_UNIMPLEMENTED = 3
OCF_ERR_INSTALLED = 5
OCF_ERR_CONFIGURED = 6
OCF_NOT_RUNNING = 7

RESKEY_PREFIX = "OCF_RESKEY_"
PARAM_POOL = "pool"
PARAM_IMPORTARGS = "importargs"
PARAM_EXPORTARGS = "exportargs"

AGENT_NAME = "ZFS"
AGENT_VERSION = "1.0"
OCF_RA_DTD = "ra-api-1.dtd"

ACT_START = "start"
ACT_STOP = "stop"
ACT_STATUS = "status"
ACT_MONITOR = "monitor"
ACT_VALIDATE = "validate-all"
ACT_METADATA = "meta-data"
ACT_USAGE = "usage"
ACT_HELP = "help"

# (action, timeout, interval) advertised in meta-data; interval None means not recurring
ACTION_TIMEOUTS = (
    (ACT_START, "60s", None),
    (ACT_STOP, "60s", None),
    (ACT_MONITOR, "30s", "5s"),
    (ACT_VALIDATE, "30s", None),
    (ACT_METADATA, "5s", None),
)

ZPOOL = "zpool"
ZFS = "zfs"
FUSER = "fuser"

# searched after PATH when looking up a tool
PROGRAM_DIRS = ("/usr/bin", "/usr/sbin", "/bin", "/sbin")

# zpool property that keeps the pool out of the boot-time import cache
NO_CACHEFILE = "cachefile=none"

# zfs mountpoint values that do not name a path; volumes report "-"
MOUNTPOINT_NONE = "none"
MOUNTPOINT_LEGACY = "legacy"
MOUNTPOINT_UNSET = "-"
MOUNTPOINT_SENTINELS = (MOUNTPOINT_NONE, MOUNTPOINT_LEGACY, MOUNTPOINT_UNSET)

# value of the zfs "mounted" property for a mounted dataset
MOUNTED_YES = "yes"

HEALTH_ONLINE = "ONLINE"
HEALTH_DEGRADED = "DEGRADED"
HEALTH_FAULTED = "FAULTED"

# exit status a shell reports for a command it cannot find
RC_NOT_FOUND = 127

CONFIG_FILE_ENV = "ZFSRA_CONFIG_FILE"
