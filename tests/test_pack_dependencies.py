from modindex.pack_dependencies import (
    EMBEDDED,
    DependencyBuilder,
    PackFile,
    download_file_name,
    pack_dependencies,
)


def test_download_file_name_takes_last_segment():
    assert download_file_name("https://cdn.example.com/data/abc/versions/x/mod.jar") == "mod.jar"


def test_download_file_name_without_slash_is_whole():
    assert download_file_name("mod.jar") == "mod.jar"


def test_download_file_name_trailing_slash_is_empty():
    assert download_file_name("https://cdn.example.com/dir/") == ""


def test_known_hash_becomes_version_dependency():
    files = [PackFile(hashes={"sha1": "aaa"}, downloads=("https://cdn.example.com/a.jar",))]
    result = pack_dependencies(files, {"aaa": (7, 9)})
    assert result == [
        DependencyBuilder(project_id=7, version_id=9, file_name=None, dependency_type=EMBEDDED)
    ]


def test_unknown_hash_uses_first_download_name():
    files = [
        PackFile(
            hashes={"sha1": "bbb"},
            downloads=("https://cdn.example.com/x/first.jar", "https://other.example.com/second.jar"),
        )
    ]
    result = pack_dependencies(files, {"aaa": (1, 2)})
    assert result == [DependencyBuilder(file_name="first.jar")]
    assert result[0].project_id is None and result[0].version_id is None


def test_file_without_sha1_or_downloads_is_skipped():
    files = [PackFile(hashes={"sha512": "ccc"}, downloads=())]
    assert pack_dependencies(files, {"ccc": (1, 2)}) == []


def test_file_without_sha1_falls_back_to_download():
    files = [PackFile(hashes={}, downloads=("https://cdn.example.com/lib.jar",))]
    assert pack_dependencies(files, {}) == [DependencyBuilder(file_name="lib.jar")]


def test_extra_files_appended_and_empty_names_dropped():
    files = [PackFile(hashes={"sha1": "aaa"})]
    result = pack_dependencies(files, {"aaa": (3, 4)}, ["overrides/config.txt", "", "mods/x.jar"])
    assert [dep.file_name for dep in result] == [None, "overrides/config.txt", "mods/x.jar"]


def test_order_follows_pack_files_and_all_embedded():
    files = [
        PackFile(hashes={"sha1": "h1"}, downloads=("https://cdn.example.com/one.jar",)),
        PackFile(hashes={"sha1": "h2"}, downloads=("https://cdn.example.com/two.jar",)),
        PackFile(hashes={"sha1": "h3"}, downloads=("https://cdn.example.com/three.jar",)),
    ]
    result = pack_dependencies(files, {"h2": (10, 20)})
    assert result[0].file_name == "one.jar"
    assert (result[1].project_id, result[1].version_id) == (10, 20)
    assert result[2].file_name == "three.jar"
    assert all(dep.dependency_type == EMBEDDED for dep in result)


def test_no_input_gives_no_dependencies():
    assert pack_dependencies([], {}, []) == []