"""
Unitary tests for zfsra/zpool.py
"""

# pylint:disable=C0103,C0111,W0212

import unittest
from unittest import mock

import pytest

from zfsra import zpool
from zfsra.zpool import HealthStatus


IMPORT_LISTING = """   pool: backup
     id: 1234567890
  state: ONLINE
 action: The pool can be imported using its name or numeric identifier.
 config:

        backup      ONLINE
          sdb       ONLINE

   pool: tank
     id: 9876543210
  state: ONLINE
 action: The pool can be imported using its name or numeric identifier.
 config:

        tank        ONLINE
          mirror-0  ONLINE
            sdc     ONLINE
            sdd     ONLINE"""


@pytest.mark.parametrize("value,expected", [
    ("ONLINE", HealthStatus.HEALTHY),
    ("DEGRADED", HealthStatus.DEGRADED),
    ("FAULTED", HealthStatus.FAULTED),
    ("  ONLINE\n", HealthStatus.HEALTHY),
    ("UNAVAIL", HealthStatus.UNKNOWN),
    ("SUSPENDED", HealthStatus.UNKNOWN),
    ("online", HealthStatus.UNKNOWN),
    ("", HealthStatus.UNKNOWN),
    (None, HealthStatus.UNKNOWN),
])
def test_parse_health(value, expected):
    assert zpool.parse_health(value) is expected


class TestZpoolDriver(unittest.TestCase):
    """
    Unitary tests for zfsra.zpool.ZpoolDriver
    """

    def setUp(self):
        self.driver = zpool.ZpoolDriver(zpool="zpool", zfs="zfs")

    @mock.patch('zfsra.zpool.is_program')
    def test_is_installed(self, mock_is_program):
        mock_is_program.return_value = "/usr/sbin/zpool"
        self.assertTrue(self.driver.is_installed())
        mock_is_program.assert_called_once_with("zpool")

    @mock.patch('zfsra.zpool.is_program')
    def test_is_installed_missing(self, mock_is_program):
        mock_is_program.return_value = None
        self.assertFalse(self.driver.is_installed())

    @mock.patch('zfsra.sh.ShellUtils.get_stdout_stderr')
    def test_is_imported(self, mock_run):
        mock_run.return_value = (0, "tank\t9.50G\t1.2M\t9.50G\t-\t0%\t0%\t1.00x\tONLINE\t-", "")
        self.assertTrue(self.driver.is_imported("tank"))
        mock_run.assert_called_once_with(["zpool", "list", "-H", "tank"])

    @mock.patch('zfsra.sh.ShellUtils.get_stdout_stderr')
    def test_is_imported_no_such_pool(self, mock_run):
        mock_run.return_value = (1, "", "cannot open 'tank': no such pool")
        self.assertFalse(self.driver.is_imported("tank"))

    @mock.patch('zfsra.sh.ShellUtils.get_stdout_stderr')
    def test_is_imported_tool_missing(self, mock_run):
        mock_run.return_value = (127, "", "[Errno 2] No such file or directory: 'zpool'")
        self.assertFalse(self.driver.is_imported("tank"))

    @mock.patch('zfsra.zpool.ZpoolDriver.is_imported')
    @mock.patch('zfsra.sh.ShellUtils.get_stdout_stderr')
    def test_import_pool_already_imported(self, mock_run, mock_imported):
        mock_imported.return_value = True
        self.assertTrue(self.driver.import_pool("tank", ("-d", "/dev/disk/by-id")))
        mock_run.assert_not_called()

    @mock.patch('zfsra.zpool.ZpoolDriver.is_imported')
    @mock.patch('zfsra.sh.ShellUtils.get_stdout_stderr')
    def test_import_pool(self, mock_run, mock_imported):
        mock_imported.return_value = False
        mock_run.return_value = (0, "", "")
        self.assertTrue(self.driver.import_pool("tank", ("-d", "/dev/disk/by-id")))
        mock_run.assert_called_once_with(
            ["zpool", "import", "-d", "/dev/disk/by-id", "-o", "cachefile=none", "tank"])
        mock_imported.assert_called_once_with("tank")

    @mock.patch('zfsra.zpool.logger')
    @mock.patch('zfsra.zpool.ZpoolDriver.is_imported')
    @mock.patch('zfsra.sh.ShellUtils.get_stdout_stderr')
    def test_import_pool_failed(self, mock_run, mock_imported, mock_logger):
        mock_imported.return_value = False
        mock_run.return_value = (1, "", "cannot import 'tank': no such pool available")
        self.assertFalse(self.driver.import_pool("tank"))
        mock_run.assert_called_once_with(["zpool", "import", "-o", "cachefile=none", "tank"])
        mock_logger.error.assert_called_once_with(
            "%s: import failed (rc=%d): %s", "tank", 1, "cannot import 'tank': no such pool available")

    @mock.patch('zfsra.zpool.ZpoolDriver.is_imported')
    @mock.patch('zfsra.sh.ShellUtils.get_stdout_stderr')
    def test_export_pool_not_imported(self, mock_run, mock_imported):
        mock_imported.return_value = False
        self.assertTrue(self.driver.export_pool("tank"))
        mock_run.assert_not_called()

    @mock.patch('zfsra.zpool.ZpoolDriver.is_imported')
    @mock.patch('zfsra.sh.ShellUtils.get_stdout_stderr')
    def test_export_pool(self, mock_run, mock_imported):
        mock_imported.return_value = True
        mock_run.return_value = (0, "", "")
        self.assertTrue(self.driver.export_pool("tank", ("-f",)))
        mock_run.assert_called_once_with(["zpool", "export", "-f", "tank"])

    @mock.patch('zfsra.zpool.ZpoolDriver.is_imported')
    @mock.patch('zfsra.sh.ShellUtils.get_stdout_stderr')
    def test_export_pool_busy(self, mock_run, mock_imported):
        mock_imported.return_value = True
        mock_run.return_value = (1, "", "cannot export 'tank': pool is busy")
        self.assertFalse(self.driver.export_pool("tank"))

    @mock.patch('zfsra.sh.ShellUtils.get_stdout_stderr')
    def test_list_mountpoints(self, mock_run):
        mock_run.return_value = (
            0, "/tank\tyes\nnone\tno\n/tank/home\tyes\nlegacy\tno\n\n/srv/data\tyes", "")
        self.assertEqual(["/tank", "/tank/home", "/srv/data"], self.driver.list_mountpoints("tank"))
        mock_run.assert_called_once_with(["zfs", "list", "-H", "-r", "-o", "mountpoint,mounted", "tank"])

    @mock.patch('zfsra.sh.ShellUtils.get_stdout_stderr')
    def test_list_mountpoints_unmounted(self, mock_run):
        # canmount=noauto dataset and a pool imported with -N
        mock_run.return_value = (0, "/tank\tno\n/tank/home\tyes\n/tank/archive\tno", "")
        self.assertEqual(["/tank/home"], self.driver.list_mountpoints("tank"))

    @mock.patch('zfsra.sh.ShellUtils.get_stdout_stderr')
    def test_list_mountpoints_volume(self, mock_run):
        mock_run.return_value = (0, "/tank\tyes\n-\t-\n/tank/home\tyes", "")
        self.assertEqual(["/tank", "/tank/home"], self.driver.list_mountpoints("tank"))

    @mock.patch('zfsra.sh.ShellUtils.get_stdout_stderr')
    def test_list_mountpoints_failed(self, mock_run):
        mock_run.return_value = (1, "", "cannot open 'tank': dataset does not exist")
        self.assertEqual([], self.driver.list_mountpoints("tank"))

    @mock.patch('zfsra.sh.ShellUtils.get_stdout_stderr')
    def test_health(self, mock_run):
        mock_run.return_value = (0, "DEGRADED", "")
        self.assertIs(HealthStatus.DEGRADED, self.driver.health("tank"))
        mock_run.assert_called_once_with(["zpool", "list", "-H", "-o", "health", "tank"])

    @mock.patch('zfsra.zpool.logger')
    @mock.patch('zfsra.sh.ShellUtils.get_stdout_stderr')
    def test_health_unrecognized(self, mock_run, mock_logger):
        mock_run.return_value = (0, "SUSPENDED", "")
        self.assertIs(HealthStatus.UNKNOWN, self.driver.health("tank"))
        mock_logger.error.assert_called_once_with("%s: unrecognized health '%s'", "tank", "SUSPENDED")

    @mock.patch('zfsra.sh.ShellUtils.get_stdout_stderr')
    def test_health_query_failed(self, mock_run):
        mock_run.return_value = (1, "", "cannot open 'tank': no such pool")
        self.assertIs(HealthStatus.UNKNOWN, self.driver.health("tank"))

    @mock.patch('zfsra.zpool.ZpoolDriver.is_imported')
    @mock.patch('zfsra.sh.ShellUtils.get_stdout_stderr')
    def test_can_import_already_imported(self, mock_run, mock_imported):
        mock_imported.return_value = True
        self.assertTrue(self.driver.can_import("tank"))
        mock_run.assert_not_called()

    @mock.patch('zfsra.zpool.ZpoolDriver.is_imported')
    @mock.patch('zfsra.sh.ShellUtils.get_stdout_stderr')
    def test_can_import_listed(self, mock_run, mock_imported):
        mock_imported.return_value = False
        mock_run.return_value = (0, IMPORT_LISTING, "")
        self.assertTrue(self.driver.can_import("tank", ("-d", "/dev/disk/by-id")))
        mock_run.assert_called_once_with(["zpool", "import", "-d", "/dev/disk/by-id"])

    @mock.patch('zfsra.zpool.ZpoolDriver.is_imported')
    @mock.patch('zfsra.sh.ShellUtils.get_stdout_stderr')
    def test_can_import_prefix_does_not_match(self, mock_run, mock_imported):
        mock_imported.return_value = False
        mock_run.return_value = (0, IMPORT_LISTING, "")
        self.assertFalse(self.driver.can_import("tan"))

    @mock.patch('zfsra.zpool.ZpoolDriver.is_imported')
    @mock.patch('zfsra.sh.ShellUtils.get_stdout_stderr')
    def test_can_import_nothing_available(self, mock_run, mock_imported):
        mock_imported.return_value = False
        mock_run.return_value = (1, "", "no pools available to import")
        self.assertFalse(self.driver.can_import("tank"))

    @mock.patch('zfsra.sh.ShellUtils.get_stdout_stderr')
    def test_status_detail(self, mock_run):
        mock_run.return_value = (0, "  pool: tank\n state: DEGRADED", "")
        self.assertEqual("  pool: tank\n state: DEGRADED", self.driver.status_detail("tank"))
        mock_run.return_value = (1, "", "cannot open 'tank'")
        self.assertEqual("", self.driver.status_detail("tank"))
