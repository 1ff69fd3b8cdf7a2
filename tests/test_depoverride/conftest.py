"""Shared fixtures for depoverride tests."""

import pytest

from depoverride.model.schema import Dependency


POM_XML = """<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0">
    <modelVersion>4.0.0</modelVersion>
    <groupId>org.example</groupId>
    <artifactId>app</artifactId>
    <version>1.0-SNAPSHOT</version>
    <dependencies>
        <!-- runtime -->
        <dependency>
            <groupId>org.example</groupId>
            <artifactId>libX</artifactId>
            <version>1.0</version>
        </dependency>
        <dependency>
            <groupId>junit</groupId>
            <artifactId>junit</artifactId>
            <version>4.8.1</version>
            <scope>test</scope>
        </dependency>
        <dependency>
            <groupId>org.slf4j</groupId>
            <artifactId>slf4j-api</artifactId>
        </dependency>
    </dependencies>
</project>
"""


@pytest.fixture
def dependencies():
    return [
        Dependency(group_id="org.example", artifact_id="libX", version="1.0"),
        Dependency(group_id="junit", artifact_id="junit", version="4.8.1"),
    ]


@pytest.fixture
def pom_file(tmp_path):
    path = tmp_path / "pom.xml"
    path.write_text(POM_XML, encoding="utf-8")
    return path
