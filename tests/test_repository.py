"""Tests for LocalRepository and PomReader: filesystem only."""

from __future__ import annotations

from pathlib import Path

import pytest

from splitpkg_scan.artifacts.pom import PomReader
from splitpkg_scan.artifacts.repository import LocalRepository, RepositoryLookup
from splitpkg_scan.exceptions import ConfigError
from splitpkg_scan.models import Dependency


class TestLocalRepository:
    def test_is_repository_lookup(self, tmp_path: Path):
        assert isinstance(LocalRepository(tmp_path), RepositoryLookup)

    def test_path_layout(self, tmp_path: Path):
        repo = LocalRepository(tmp_path)
        dep = Dependency(group_id="org.apache.commons", artifact_id="commons-lang3", version="3.14.0")
        assert repo.path_of(dep) == (
            tmp_path / "org" / "apache" / "commons" / "commons-lang3" / "3.14.0"
            / "commons-lang3-3.14.0.jar"
        )

    def test_classifier_in_file_name(self, tmp_path: Path):
        repo = LocalRepository(tmp_path)
        dep = Dependency(group_id="g", artifact_id="a", version="1", classifier="sources")
        assert repo.path_of(dep).name == "a-1-sources.jar"

    def test_test_jar_type(self, tmp_path: Path):
        repo = LocalRepository(tmp_path)
        dep = Dependency(group_id="g", artifact_id="a", version="1", type="test-jar")
        assert repo.path_of(dep).name == "a-1-tests.jar"

    def test_other_type_used_as_extension(self, tmp_path: Path):
        repo = LocalRepository(tmp_path)
        dep = Dependency(group_id="g", artifact_id="a", version="1", type="war")
        assert repo.path_of(dep).name == "a-1.war"

    def test_find_existing(self, local_repo):
        jar = local_repo("com.acme", "util", "1.0")
        repo = LocalRepository(local_repo.root)
        assert repo.find(Dependency(group_id="com.acme", artifact_id="util", version="1.0")) == jar

    def test_find_missing_returns_none(self, tmp_path: Path):
        repo = LocalRepository(tmp_path)
        assert repo.find(Dependency(group_id="com.acme", artifact_id="util", version="1.0")) is None

    def test_root_from_env(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("SPLITPKG_LOCAL_REPOSITORY", str(tmp_path))
        assert LocalRepository().root == tmp_path


POM = """\
<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0">
  <modelVersion>4.0.0</modelVersion>
  <groupId>com.acme</groupId>
  <artifactId>app</artifactId>
  <version>2.0</version>
  <properties>
    <guava.version>33.0.0-jre</guava.version>
  </properties>
  <dependencyManagement>
    <dependencies>
      <dependency>
        <groupId>org.slf4j</groupId>
        <artifactId>slf4j-api</artifactId>
        <version>2.0.9</version>
      </dependency>
    </dependencies>
  </dependencyManagement>
  <dependencies>
    <dependency>
      <groupId>com.google.guava</groupId>
      <artifactId>guava</artifactId>
      <version>${guava.version}</version>
    </dependency>
    <dependency>
      <groupId>org.slf4j</groupId>
      <artifactId>slf4j-api</artifactId>
    </dependency>
    <dependency>
      <groupId>${project.groupId}</groupId>
      <artifactId>acme-core</artifactId>
      <version>${project.version}</version>
      <scope>runtime</scope>
      <classifier>shaded</classifier>
    </dependency>
    <dependency>
      <groupId>org.junit.jupiter</groupId>
      <artifactId>junit-jupiter</artifactId>
      <version>5.10.0</version>
      <scope>test</scope>
    </dependency>
  </dependencies>
  <build>
    <plugins>
      <plugin>
        <artifactId>maven-surefire-plugin</artifactId>
        <dependencies>
          <dependency>
            <groupId>org.plugin</groupId>
            <artifactId>plugin-dep</artifactId>
            <version>1.0</version>
          </dependency>
        </dependencies>
      </plugin>
    </plugins>
  </build>
</project>
"""


class TestPomReader:
    def test_reads_project_dependencies(self):
        deps = PomReader().parse(POM)
        assert [d.artifact_id for d in deps] == [
            "guava",
            "slf4j-api",
            "acme-core",
            "junit-jupiter",
        ]

    def test_property_substitution(self):
        deps = {d.artifact_id: d for d in PomReader().parse(POM)}
        assert deps["guava"].version == "33.0.0-jre"
        assert deps["acme-core"].group_id == "com.acme"
        assert deps["acme-core"].version == "2.0"

    def test_managed_version(self):
        deps = {d.artifact_id: d for d in PomReader().parse(POM)}
        assert deps["slf4j-api"].version == "2.0.9"

    def test_scope_defaults_to_compile(self):
        deps = {d.artifact_id: d for d in PomReader().parse(POM)}
        assert deps["guava"].scope == "compile"
        assert deps["acme-core"].scope == "runtime"
        assert deps["junit-jupiter"].scope == "test"

    def test_classifier_and_type(self):
        deps = {d.artifact_id: d for d in PomReader().parse(POM)}
        assert deps["acme-core"].classifier == "shaded"
        assert deps["guava"].type == "jar"

    def test_non_namespaced_pom(self):
        pom = (
            "<project><dependencies><dependency>"
            "<groupId>g</groupId><artifactId>a</artifactId><version>1</version>"
            "</dependency></dependencies></project>"
        )
        assert PomReader().parse(pom) == [Dependency(group_id="g", artifact_id="a", version="1")]

    def test_dependency_without_version_ignored(self):
        pom = (
            "<project><dependencies><dependency>"
            "<groupId>g</groupId><artifactId>a</artifactId>"
            "</dependency></dependencies></project>"
        )
        assert PomReader().parse(pom) == []

    def test_invalid_xml_raises_config_error(self):
        with pytest.raises(ConfigError, match="Invalid POM"):
            PomReader().parse("<project><dependencies>")

    def test_read_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="Cannot read POM"):
            PomReader().read(tmp_path / "pom.xml")

    def test_read_file(self, tmp_path: Path):
        pom = tmp_path / "pom.xml"
        pom.write_text(POM)
        assert len(PomReader().read(pom)) == 4
