import logging
from pathlib import Path

import pytest
from factories import write_project

from bench_buddy.collect.discovery import discover_benchmark_projects, references_package


class TestReferencesPackage:
    def test_detects_package_reference(self, tmp_path: Path) -> None:
        project = write_project(tmp_path / "Bench.csproj")
        assert references_package(project) is True

    def test_match_is_case_insensitive_and_trimmed(self, tmp_path: Path) -> None:
        project = write_project(tmp_path / "Bench.csproj", package="  benchmarkdotnet ")
        assert references_package(project) is True

    def test_similar_name_does_not_match(self, tmp_path: Path) -> None:
        project = write_project(tmp_path / "Bench.csproj", package="BenchmarkDotNet.Annotations")
        assert references_package(project) is False

    def test_msbuild_namespace(self, tmp_path: Path) -> None:
        project = tmp_path / "Legacy.csproj"
        project.write_text(
            '<Project xmlns="http://schemas.microsoft.com/developer/msbuild/2003">'
            '<ItemGroup><PackageReference Include="BenchmarkDotNet" /></ItemGroup>'
            "</Project>"
        )
        assert references_package(project) is True


class TestDiscoverBenchmarkProjects:
    def test_finds_nested_projects_sorted(self, tmp_path: Path) -> None:
        b = write_project(tmp_path / "src" / "b" / "B.Bench.csproj")
        a = write_project(tmp_path / "bench" / "A.Bench.csproj")
        write_project(tmp_path / "src" / "App.csproj", package="Newtonsoft.Json")

        assert discover_benchmark_projects(tmp_path) == [a, b]

    def test_no_projects_is_empty(self, tmp_path: Path) -> None:
        assert discover_benchmark_projects(tmp_path) == []

    def test_malformed_descriptor_is_skipped(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        good = write_project(tmp_path / "Good.csproj")
        (tmp_path / "Broken.csproj").write_text("<Project><ItemGroup>")

        with caplog.at_level(logging.WARNING):
            projects = discover_benchmark_projects(tmp_path)

        assert projects == [good]
        assert "Broken.csproj" in caplog.text
        assert "Failed to parse" in caplog.text
