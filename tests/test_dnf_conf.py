from fedorox.pkgs.dnf_conf import optimize_dnf_config, set_main_options

OPTIONS = {"fastestmirror": "True", "max_parallel_downloads": "10"}


def test_updates_existing_and_adds_missing_keys(tmp_path):
    path = tmp_path / "dnf.conf"
    original = "[main]\ngpgcheck=True\nmax_parallel_downloads=3\n"
    path.write_text(original)

    assert optimize_dnf_config(str(path), OPTIONS) is True

    assert path.read_text() == "[main]\ngpgcheck=True\nmax_parallel_downloads=10\nfastestmirror=True\n"
    assert (tmp_path / "dnf.conf.bak").read_text() == original


def test_comments_and_formatting_are_kept(tmp_path):
    path = tmp_path / "dnf.conf"
    path.write_text(
        "# see `man dnf.conf` for defaults and possible options\n"
        "\n"
        "[main]\n"
        "gpgcheck = True\n"
        "# fastestmirror=False\n"
        "installonly_limit=3\n"
    )

    assert optimize_dnf_config(str(path), {"fastestmirror": "True"}) is True

    assert path.read_text() == (
        "# see `man dnf.conf` for defaults and possible options\n"
        "\n"
        "[main]\n"
        "gpgcheck = True\n"
        "# fastestmirror=False\n"
        "installonly_limit=3\n"
        "fastestmirror=True\n"
    )


def test_keys_stay_in_main_section():
    lines = ["[main]\n", "gpgcheck=True\n", "[updates]\n", "fastestmirror=False\n"]

    assert set_main_options(lines, {"fastestmirror": "True"}) == [
        "[main]\n", "gpgcheck=True\n", "fastestmirror=True\n", "[updates]\n", "fastestmirror=False\n",
    ]


def test_missing_main_section_is_added():
    assert set_main_options(["# empty"], {"fastestmirror": "True"}) == [
        "# empty\n", "[main]\n", "fastestmirror=True\n",
    ]


def test_missing_file_fails(tmp_path):
    assert optimize_dnf_config(str(tmp_path / "nope.conf"), OPTIONS) is False
