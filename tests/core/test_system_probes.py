"""
Тесты для проб, которые не используют WMI: накопители, сеть, дисплей,
операционная система и прошивка.
"""
import sys
import pytest
from collections import namedtuple
from unittest.mock import MagicMock

from src.win11check.core.errors import QueryUnavailable
from src.win11check.core.models import FirmwareInfo
from src.win11check.core.modules.display import DisplayProbe
from src.win11check.core.modules.firmware import FirmwareProbe
from src.win11check.core.modules.network import NetworkProbe
from src.win11check.core.modules.os_info import OperatingSystemProbe
from src.win11check.core.modules.storage import StorageProbe

GIB = 1024 ** 3

Partition = namedtuple("Partition", "device mountpoint fstype opts")
Usage = namedtuple("Usage", "total used free percent")
IfStats = namedtuple("IfStats", "isup duplex speed mtu")


class TestStorageProbe:

    def test_takes_largest_free_space_among_ready_drives(self, mocker):
        # GIVEN: три готовых диска со 10, 25 и 5 ГиБ свободного места
        partitions = [Partition(f"{d}:\\", f"{d}:\\", "NTFS", "rw,fixed") for d in "CDE"]
        free = {"C:\\": 10 * GIB, "D:\\": 25 * GIB, "E:\\": 5 * GIB}
        mocker.patch("src.win11check.core.modules.storage.psutil.disk_partitions", return_value=partitions)
        mocker.patch(
            "src.win11check.core.modules.storage.psutil.disk_usage",
            side_effect=lambda mount: Usage(100 * GIB, 0, free[mount], 0.0),
        )

        # WHEN / THEN
        assert StorageProbe().query() == 25 * GIB

    @pytest.mark.parametrize("error", [
        PermissionError("The device is not ready"),
        OSError(21, "The device is not ready"),
    ])
    def test_not_ready_drives_are_skipped(self, mocker, error):
        partitions = [Partition("C:\\", "C:\\", "NTFS", "rw,fixed"), Partition("F:\\", "F:\\", "", "cdrom")]

        def disk_usage(mount):
            if mount == "F:\\":
                raise error
            return Usage(100 * GIB, 0, 7 * GIB, 0.0)

        mocker.patch("src.win11check.core.modules.storage.psutil.disk_partitions", return_value=partitions)
        mocker.patch("src.win11check.core.modules.storage.psutil.disk_usage", side_effect=disk_usage)

        assert StorageProbe().query() == 7 * GIB

    def test_no_ready_drives_is_unavailable(self, mocker):
        mocker.patch("src.win11check.core.modules.storage.psutil.disk_partitions", return_value=[])
        with pytest.raises(QueryUnavailable):
            StorageProbe().query()


class TestNetworkProbe:

    def test_active_physical_interface_means_available(self, mocker):
        mocker.patch(
            "src.win11check.core.modules.network.psutil.net_if_stats",
            return_value={
                "Loopback Pseudo-Interface 1": IfStats(True, 0, 1073, 1500),
                "Ethernet": IfStats(True, 2, 1000, 1500),
            },
        )
        assert NetworkProbe().query() is True

    def test_only_loopback_up_means_unavailable_network(self, mocker):
        mocker.patch(
            "src.win11check.core.modules.network.psutil.net_if_stats",
            return_value={
                "lo": IfStats(True, 0, 0, 65536),
                "Wi-Fi": IfStats(False, 0, 0, 1500),
            },
        )
        assert NetworkProbe().query() is False


class TestDisplayProbe:

    def test_physical_resolution_of_primary_screen(self, mocker):
        # GIVEN: экран 1280x720 логических пикселей при масштабе 150%
        screen = MagicMock()
        screen.geometry.return_value.width.return_value = 1280
        screen.geometry.return_value.height.return_value = 720
        screen.devicePixelRatio.return_value = 1.5
        gui_app = mocker.patch("src.win11check.core.modules.display.QGuiApplication")
        gui_app.primaryScreen.return_value = screen

        # WHEN / THEN
        assert DisplayProbe().query() == (1920, 1080)

    def test_without_gui_application_is_unavailable(self, mocker):
        gui_app = mocker.patch("src.win11check.core.modules.display.QGuiApplication")
        gui_app.instance.return_value = None
        with pytest.raises(QueryUnavailable):
            DisplayProbe().query()

    def test_runs_in_gui_thread(self):
        assert DisplayProbe.runs_inline is True


class TestOperatingSystemProbe:

    def test_description_from_platform(self, mocker):
        mocker.patch("src.win11check.core.modules.os_info.platform.system", return_value="Windows")
        mocker.patch("src.win11check.core.modules.os_info.platform.version", return_value="10.0.22631")
        assert OperatingSystemProbe().query() == "Windows 10.0.22631"


class TestFirmwareProbe:

    def test_uefi_with_secure_boot(self, mocker):
        mocker.patch.object(FirmwareProbe, "_read_firmware_type", return_value="UEFI")
        mocker.patch.object(FirmwareProbe, "_read_secure_boot", return_value=True)
        assert FirmwareProbe().query() == FirmwareInfo("UEFI", True)

    def test_legacy_bios_does_not_read_secure_boot(self, mocker):
        mocker.patch.object(FirmwareProbe, "_read_firmware_type", return_value="BIOS")
        read_secure_boot = mocker.patch.object(FirmwareProbe, "_read_secure_boot")
        assert FirmwareProbe().query() == FirmwareInfo("BIOS", None)
        read_secure_boot.assert_not_called()

    def test_secure_boot_read_from_registry(self, mocker):
        # GIVEN: фейковый winreg, возвращающий UEFISecureBootEnabled = 1
        fake_winreg = MagicMock()
        fake_winreg.QueryValueEx.return_value = (1, 4)
        mocker.patch.dict(sys.modules, {"winreg": fake_winreg})

        # WHEN / THEN
        assert FirmwareProbe()._read_secure_boot() is True
        assert "SecureBoot" in fake_winreg.OpenKey.call_args[0][1]

    def test_missing_secure_boot_key_is_unknown(self, mocker):
        fake_winreg = MagicMock()
        fake_winreg.OpenKey.side_effect = FileNotFoundError
        mocker.patch.dict(sys.modules, {"winreg": fake_winreg})
        assert FirmwareProbe()._read_secure_boot() is None

    @pytest.mark.skipif(sys.platform == "win32", reason="ctypes.windll есть только в Windows")
    def test_firmware_type_unavailable_outside_windows(self):
        with pytest.raises(QueryUnavailable):
            FirmwareProbe()._read_firmware_type()
