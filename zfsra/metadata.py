# Copyright (C) 2026 zfsra developers
# See COPYING for license information.
"""
OCF meta-data of the agent

The document is static: it does not depend on the environment, on the
configuration or on the state of any pool.
"""
from lxml import etree

from . import constants


PARAMETERS = (
    # name, unique, required, shortdesc, longdesc
    (constants.PARAM_POOL, True, True,
     "Name of the ZFS pool",
     "Name of the ZFS pool to manage. It must be unique across the cluster."),
    (constants.PARAM_IMPORTARGS, False, False,
     "Extra zpool import arguments",
     "Additional arguments passed to 'zpool import', for example \"-d /dev/disk/by-id\"."),
    (constants.PARAM_EXPORTARGS, False, False,
     "Extra zpool export arguments",
     "Additional arguments passed to 'zpool export'."),
)

LONGDESC = """This script manages a ZFS pool. It imports the pool on start
and exports it on stop. Processes using a dataset of the pool are killed
before the export, as zpool export cannot be forced everywhere. The pool is
imported with cachefile=none so that only the cluster decides where it is
imported."""


def new(tag, **attributes):
    """
    <tag/>
    """
    return etree.Element(tag, **attributes)


def child(parent, tag, text=None, **attributes):
    """append new tag to parent"""
    e = etree.SubElement(parent, tag, **attributes)
    if text is not None:
        e.text = text
    return e


def _flag(value):
    return "1" if value else "0"


def _desc(parent, shortdesc, longdesc):
    child(parent, "longdesc", longdesc, lang="en")
    child(parent, "shortdesc", shortdesc, lang="en")


def build():
    """
    <resource-agent name="ZFS" version="1.0"/>
    """
    root = new("resource-agent", name=constants.AGENT_NAME, version=constants.AGENT_VERSION)
    child(root, "version", constants.AGENT_VERSION)
    _desc(root, "Manages ZFS pools", LONGDESC)

    params = child(root, "parameters")
    for name, unique, required, shortdesc, longdesc in PARAMETERS:
        param = child(params, "parameter", name=name, unique=_flag(unique), required=_flag(required))
        _desc(param, shortdesc, longdesc)
        content = child(param, "content", type="string")
        if not required:
            content.set("default", "")

    actions = child(root, "actions")
    for name, timeout, interval in constants.ACTION_TIMEOUTS:
        action = child(actions, "action", name=name, timeout=timeout)
        if interval is not None:
            action.set("interval", interval)
    return root


def tostring(root=None):
    if root is None:
        root = build()
    return etree.tostring(
        root,
        pretty_print=True,
        xml_declaration=True,
        encoding="UTF-8",
        doctype='<!DOCTYPE resource-agent SYSTEM "{}">'.format(constants.OCF_RA_DTD),
    ).decode("utf-8")
