from pytest import fixture

from gh_contents import (
    ContentsService,
    RepositoryContents,
    RepositoryFile,
    RepositoryId,
)
from tests.doubles import FakeTransport


@fixture()
def repository():
    return RepositoryId(owner="octocat", name="Hello-World")


@fixture()
def transport():
    return FakeTransport()


@fixture()
def service(transport):
    return ContentsService(transport)


@fixture()
def file_entry():
    return RepositoryContents(
        name="b.txt",
        path="a/b.txt",
        type="file",
        sha="abc",
        size=4,
        content="ZGF0YQ==",
        encoding="base64",
    )


@fixture()
def readme_json():
    return {
        "type": "file",
        "encoding": "base64",
        "size": 13,
        "name": "README.md",
        "path": "README.md",
        "content": "SGVsbG8sIFdvcmxk\nIQ==\n",
        "sha": "3d21ec53a331a6f037a91c368710b99387d012c1",
        "url": "https://api.github.com/repos/octocat/Hello-World/contents/README.md",
        "git_url": "https://api.github.com/repos/octocat/Hello-World/git/blobs/3d21ec53",
        "html_url": "https://github.com/octocat/Hello-World/blob/master/README.md",
        "download_url": "https://raw.githubusercontent.com/octocat/Hello-World/master/README.md",
        "_links": {"self": "https://api.github.com/repos/octocat/Hello-World/contents/README.md"},
    }


@fixture()
def listing_json():
    return [
        {
            "type": "dir",
            "size": 0,
            "name": "docs",
            "path": "docs",
            "sha": "a84d88e7554fc1fa21bcbc4efae3c782a70d2b9d",
            "download_url": None,
        },
        {
            "type": "file",
            "size": 625,
            "name": "README.md",
            "path": "README.md",
            "sha": "3d21ec53a331a6f037a91c368710b99387d012c1",
        },
        {
            "type": "submodule",
            "size": 0,
            "name": "lib",
            "path": "lib",
            "sha": "fa5b8ad0d47e34d88f39a1bb7d33fcc5a9aeb8e8",
        },
    ]


@fixture()
def write_result_json():
    return {
        "content": {
            "name": "b.txt",
            "path": "a/b.txt",
            "sha": "95b966ae1c166bd92f8ae7d1c313e738c731dfc3",
            "size": 4,
            "type": "file",
        },
        "commit": {
            "sha": "7638417db6d59f3c431d3e1f261cc637155684cd",
            "message": "create file b.txt",
            "author": {
                "name": "Monalisa Octocat",
                "email": "octocat@github.com",
                "date": "2014-11-07T22:01:45Z",
            },
            "tree": {"sha": "691272480426f78a0138979dd3ce63b77f706feb"},
            "parents": [{"sha": "1acc419d4d6a9ce985db7be48c6349a0475975b5"}],
        },
    }


@fixture()
def write_result(write_result_json):
    return RepositoryFile.model_validate(write_result_json)
