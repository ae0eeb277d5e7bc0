from unittest.mock import patch

from fedorox.pkgs.fedora import FedoraPackageManager


@patch('shutil.which', return_value='/usr/bin/dnf')
@patch('subprocess.run')
def test_upgrade_and_clean(mock_run, mock_which):
    pm = FedoraPackageManager()

    pm.upgrade()
    pm.clean()

    assert [c.args[0] for c in mock_run.call_args_list] == [
        ['dnf', 'upgrade', '-y'],
        ['dnf', 'clean', 'packages'],
    ]


@patch('shutil.which', return_value='/usr/bin/dnf')
@patch('subprocess.run')
def test_install(mock_run, mock_which):
    FedoraPackageManager().install("snapper", "libdnf5-plugin-actions")

    mock_run.assert_called_once_with(['dnf', 'install', '-y', 'snapper', 'libdnf5-plugin-actions'], check=True)
