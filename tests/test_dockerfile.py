"""이 파일은 .py 테스트 모듈로 Dockerfile 베이스 이미지 추출을 검증합니다."""

from rhda.analysis.dockerfile import (
    DockerfileImages,
    ImageRef,
    is_dockerfile,
    parse_dockerfile,
    parse_from_line,
)


def _write(tmp_path, text: str):
    path = tmp_path / "Dockerfile"
    path.write_text(text)
    return path


def test_parse_platform_and_stage_alias(tmp_path) -> None:
    path = _write(tmp_path, "FROM --platform=linux/amd64 node:18 AS builder\nRUN npm ci\n")
    assert parse_dockerfile(path) == {ImageRef("node:18", "linux/amd64")}


def test_parse_skips_scratch_and_deduplicates(tmp_path) -> None:
    text = "\n".join(
        [
            "FROM alpine:3.19 AS base",
            "FROM scratch",
            "  FROM alpine:3.19",
            "FROM --platform=linux/arm64 alpine:3.19",
            "RUN echo FROM ubuntu",
        ]
    )
    path = _write(tmp_path, text)
    refs = parse_dockerfile(path)
    assert refs == {ImageRef("alpine:3.19"), ImageRef("alpine:3.19", "linux/arm64")}


def test_parse_stage_alias_is_case_insensitive() -> None:
    assert parse_from_line("FROM golang:1.22 as build") == ImageRef("golang:1.22")
    assert parse_from_line("FROM SCRATCH") is None
    assert parse_from_line("FROM ") is None
    assert parse_from_line("# FROM nginx") is None


def test_parse_missing_file_returns_empty(tmp_path) -> None:
    assert parse_dockerfile(tmp_path / "missing") == set()


def test_lazy_collection_reads_on_each_iteration(tmp_path) -> None:
    path = _write(tmp_path, "FROM nginx:1.25\n")
    images = DockerfileImages(path)
    assert list(images) == [ImageRef("nginx:1.25")]
    path.write_text("FROM nginx:1.25\nFROM redis:7\n")
    assert len(images) == 2
    assert set(images) == {ImageRef("nginx:1.25"), ImageRef("redis:7")}
    assert not DockerfileImages(tmp_path / "missing")


def test_is_dockerfile_checks_first_instruction(tmp_path) -> None:
    assert is_dockerfile(_write(tmp_path, "# syntax comment\n\nFROM python:3.12\n"))
    assert not is_dockerfile(_write(tmp_path, "ARG VERSION=3.12\nFROM python:${VERSION}\n"))
    manifest = tmp_path / "package.json"
    manifest.write_text('{"name": "demo"}')
    assert not is_dockerfile(manifest)
    empty = tmp_path / "empty"
    empty.write_text("\n# only comments\n")
    assert not is_dockerfile(empty)


def test_image_ref_cli_arg() -> None:
    ref = ImageRef("nginx:1.25", "linux/amd64")
    assert ref.to_cli_arg() == "nginx:1.25^^linux/amd64"
    assert ImageRef.from_cli_arg("nginx:1.25^^linux/amd64") == ref
    assert ImageRef("nginx:1.25").to_cli_arg() == "nginx:1.25"
    assert str(ref) == "nginx:1.25 (linux/amd64)"


def test_non_utf8_bytes_do_not_break_parsing(tmp_path) -> None:
    path = tmp_path / "Dockerfile"
    path.write_bytes(b"LABEL author=\"M\xfcller\"\nFROM nginx:1.25\n")
    assert is_dockerfile(path) is False
    path.write_bytes(b"FROM nginx:1.25\nLABEL author=\"M\xfcller\"\n")
    assert is_dockerfile(path)
    assert parse_dockerfile(path) == {ImageRef("nginx:1.25")}
