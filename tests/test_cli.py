from __future__ import annotations

from pathlib import Path

from bloggen.cli import main


def test_main_builds_site(site, argv, capsys):
    assert main(argv) == 0
    output = site["output"]
    assert (output / "2023" / "04" / "my-great-post.html").is_file()
    assert (output / "2021" / "11" / "plain.html").is_file()
    assert (output / "2023" / "04" / "images" / "hero.png").is_file()
    out = capsys.readouterr().out
    assert "2023/04/my-great-post.html" in out
    assert "Rendered 2 articles (0 failed)" in out


def test_article_failures_keep_exit_code(site, argv, capsys):
    (site["articles"] / "loose.md").write_text("No date here\n", encoding="utf-8")
    assert main(argv) == 0
    captured = capsys.readouterr()
    assert "loose.md" in captured.err
    assert "Rendered 2 articles (1 failed)" in captured.out


def test_missing_categories_is_fatal(site, argv, capsys):
    site["categories"].unlink()
    assert main(argv) == 1
    assert "categories.json" in capsys.readouterr().err
    assert not (site["output"] / "2023").exists()


def test_broken_template_is_fatal(site, argv, capsys):
    (site["templates"] / "article.html").write_text("{{title", encoding="utf-8")
    assert main(argv) == 1
    assert "unbalanced" in capsys.readouterr().err


def test_missing_articles_dir_is_fatal(site, argv, capsys):
    idx = argv.index("--articles")
    argv[idx + 1] = str(site["root"] / "nowhere")
    assert main(argv) == 1
    assert "Articles directory not found" in capsys.readouterr().err


def test_config_file_supplies_defaults(site, capsys, tmp_path: Path):
    config = tmp_path / "bloggen.toml"
    config.write_text(
        "\n".join(
            [
                f'articles = "{site["articles"].as_posix()}"',
                f'output = "{site["output"].as_posix()}"',
                f'templates = "{site["templates"].as_posix()}"',
                f'categories = "{site["categories"].as_posix()}"',
                "build_workers = 1",
            ]
        ),
        encoding="utf-8",
    )
    assert main(["--config", str(config)]) == 0
    assert (site["output"] / "2021" / "11" / "plain.html").is_file()
