from __future__ import annotations

import json
import logging

import config
from technology_timeline import EraTechnology, TechnologyTimeline


def write_timeline(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_load_from_file(tmp_path):
    path = write_timeline(tmp_path / "timeline.json", {
        "technologies": [
            {
                "name": "transistor",
                "yearInvented": 1947,
                "yearCommon": 1955,
                "periodTerms": [{"year": 1947, "term": "transfer resistor"}],
            },
        ],
        "terminology": [{"modern": "software", "earliest": 1958, "before": "programs"}],
    })

    timeline = TechnologyTimeline()
    timeline.load(path)

    assert timeline.is_loaded is True
    assert timeline.find_technology("Transistor").year_common == 1955
    assert timeline.get_period_term("transistor", 1948) == "transfer resistor"
    assert timeline.get_period_term("software", 1950) == "programs"
    assert timeline.get_period_term("software", 1960) == "software"


def test_load_only_once(tmp_path):
    first = write_timeline(tmp_path / "first.json", {"technologies": [
        {"name": "transistor", "yearInvented": 1947, "yearCommon": 1955},
    ]})
    second = write_timeline(tmp_path / "second.json", {"technologies": []})

    timeline = TechnologyTimeline()
    timeline.load(first)
    timeline.load(second)

    assert len(timeline.technologies) == 1


def test_missing_file_leaves_empty_loaded_timeline(tmp_path, caplog):
    timeline = TechnologyTimeline()
    with caplog.at_level(logging.WARNING):
        timeline.load(str(tmp_path / "nope.json"))

    assert timeline.is_loaded is True
    assert timeline.technologies == []
    assert "Could not load technology timeline" in caplog.text


def test_malformed_file_leaves_empty_timeline(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    timeline = TechnologyTimeline()
    timeline.load(str(path))

    assert timeline.is_loaded is True
    assert timeline.terminology == []
    assert timeline.is_anachronism("transistor", 1900) is False


def test_shipped_timeline_loads():
    timeline = TechnologyTimeline()
    timeline.load(config.DEFAULT_TIMELINE_PATH)

    assert timeline.find_technology("microprocessor") is not None
    assert timeline.get_period_term("microprocessor", 1972) == "computer on a chip"
    assert timeline.is_anachronism("personal computer", 1970) is True


def test_year_invented_stands_in_for_missing_year_common():
    tech = EraTechnology.from_dict({"name": "laser", "yearInvented": 1960})
    assert tech.year_common == 1960
    assert tech.to_dict()["yearCommon"] == 1960


def test_period_term_before_any_entry():
    timeline = TechnologyTimeline()
    timeline.set_technologies([EraTechnology.from_dict({
        "name": "microprocessor",
        "yearInvented": 1971,
        "yearCommon": 1975,
        "periodTerms": [{"year": 1971, "term": "computer on a chip"}],
    })])

    assert timeline.get_period_term("microprocessor", 1965) == "microprocessor"
