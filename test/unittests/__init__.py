import os

_here = os.path.dirname(__file__)
os.environ["ZFSRA_CONFIG_FILE"] = os.path.join(_here, "test.conf")

from zfsra import config
config.reset()
