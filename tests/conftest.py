"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules: sample
descriptor documents, a synthetic project tree and an in-memory
read-only attribute implementation.
"""

from pathlib import Path

import pytest

MSBUILD_NAMESPACE = "http://schemas.microsoft.com/developer/msbuild/2003"


class FakeFileAttributes:
    """In-memory FileAttributes that records every call."""

    def __init__(self, read_only: tuple[Path, ...] = ()) -> None:
        self.read_only: set[Path] = set(read_only)
        self.cleared: list[Path] = []

    def is_read_only(self, path: Path) -> bool:
        return Path(path) in self.read_only

    def clear_read_only(self, path: Path) -> None:
        self.cleared.append(Path(path))
        self.read_only.discard(Path(path))


def _project_xml(namespace: str | None) -> str:
    xmlns = f' xmlns="{namespace}"' if namespace else ""
    return f"""<?xml version="1.0" encoding="utf-8"?>
<Project ToolsVersion="4.0" DefaultTargets="Build"{xmlns}>
  <PropertyGroup>
    <Configuration Condition=" '$(Configuration)' == '' ">Debug</Configuration>
    <ProjectGuid>{{6B1D2C5E-0F3A-4D8B-9C1E-2A7F4B3D5E60}}</ProjectGuid>
    <OutputType>Library</OutputType>
    <SccProjectName>SAK</SccProjectName>
    <SccLocalPath>SAK</SccLocalPath>
    <SccAuxPath>SAK</SccAuxPath>
    <SccProvider>SAK</SccProvider>
    <RootNamespace>App</RootNamespace>
  </PropertyGroup>
  <!-- build configurations -->
  <ItemGroup>
    <Compile Include="Program.cs" />
  </ItemGroup>
</Project>
"""


SOLUTION_BEFORE = (
    "\r\n"
    "Microsoft Visual Studio Solution File, Format Version 11.00\r\n"
    "# Visual Studio 2010\r\n"
    'Project("{FAE04EC0-301F-11D3-BF4B-00C04F79EFBC}") = "App", "proj\\App.csproj", '
    '"{6B1D2C5E-0F3A-4D8B-9C1E-2A7F4B3D5E60}"\r\n'
    "EndProject\r\n"
    "Global"
)

SOLUTION_SECTION = (
    "\r\n"
    "\tGlobalSection(TeamFoundationVersionControl) = preSolution\r\n"
    "\t\tSccNumberOfProjects = 2\r\n"
    "\t\tSccEnterpriseProvider = {4CA58AB2-18FA-4F8D-95D4-32DDF27D184C}\r\n"
    "\t\tSccTeamFoundationServer = http://tfs.example.com:8080/tfs/defaultcollection\r\n"
    "\t\tSccLocalPath0 = .\r\n"
    "\tEndGlobalSection"
)

SOLUTION_AFTER = (
    "\r\n"
    "\tGlobalSection(SolutionConfigurationPlatforms) = preSolution\r\n"
    "\t\tDebug|Any CPU = Debug|Any CPU\r\n"
    "\t\tRelease|Any CPU = Release|Any CPU\r\n"
    "\tEndGlobalSection\r\n"
    "EndGlobal\r\n"
)


@pytest.fixture
def project_xml() -> str:
    """MSBuild project with the default namespace and four binding elements."""
    return _project_xml(MSBUILD_NAMESPACE)


@pytest.fixture
def project_xml_no_namespace() -> str:
    """The same project without a default namespace declaration."""
    return _project_xml(None)


@pytest.fixture
def solution_text() -> str:
    """Solution file text with a Team Foundation version control section."""
    return SOLUTION_BEFORE + SOLUTION_SECTION + SOLUTION_AFTER


@pytest.fixture
def clean_solution_text() -> str:
    """Expected solution text once the version control section is removed."""
    return SOLUTION_BEFORE + SOLUTION_AFTER


@pytest.fixture
def fake_attributes() -> FakeFileAttributes:
    """Read-only attribute implementation that only records calls."""
    return FakeFileAttributes()


@pytest.fixture
def project_tree(tmp_path: Path, project_xml: str, solution_text: str) -> Path:
    """Synthetic solution tree.

    Layout::

        root/
            proj/bin/Debug/App.dll
            proj/obj/Debug/App.pdb
            proj/App.csproj      (4 binding elements)
            solution.sln         (version control section)
            readme.md
    """
    root = tmp_path / "root"
    proj = root / "proj"
    (proj / "bin" / "Debug").mkdir(parents=True)
    (proj / "bin" / "Debug" / "App.dll").write_bytes(b"MZ\x90\x00")
    (proj / "obj" / "Debug").mkdir(parents=True)
    (proj / "obj" / "Debug" / "App.pdb").write_bytes(b"\x00\x01")
    (proj / "App.csproj").write_text(project_xml, encoding="utf-8")
    (root / "solution.sln").write_bytes(solution_text.encode("utf-8"))
    (root / "readme.md").write_text("# App\n", encoding="utf-8")
    return root
