"""
Tests for the continuation/validity filter and the entity aggregator.

Run with: pytest tests/test_continuation.py -v
"""

import pytest

from constants import (
    SKIP_MISSING_REQUIRED,
    SKIP_NO_SPECIFICATION,
    SKIP_NOTE_ROW,
    SKIP_ORPHAN_CONTINUATION,
    STATUS_SOLD_OUT,
)
from services.csv_ingest.aggregator import (
    EntityAggregator,
    build_configuration,
    make_config_id,
    make_project_id,
)
from services.csv_ingest.continuation import (
    ProjectAnchor,
    inherit_from,
    is_note,
    resolve_row,
)
from services.csv_ingest.row_parser import empty_row


def make_row(**values):
    row = empty_row()
    row.update(values)
    return row


@pytest.fixture
def anchor_row():
    return make_row(
        builder="B",
        projectName="P",
        location="L",
        salesPerson="Asha 9876543210",
        landParcel="5 Acre",
        launchDate="2024",
        specification="2BHK",
    )


@pytest.fixture
def anchor(anchor_row):
    return ProjectAnchor.from_row(anchor_row)


# =============================================================================
# Validity Filter
# =============================================================================

class TestResolveRow:

    def test_complete_row_is_valid(self, anchor_row):
        decision = resolve_row(anchor_row, None)
        assert decision.is_valid
        assert decision.inherited is False
        assert decision.row == anchor_row

    def test_missing_specification(self, anchor_row):
        anchor_row['specification'] = ''
        decision = resolve_row(anchor_row, None)
        assert not decision.is_valid
        assert decision.skip_reason == SKIP_NO_SPECIFICATION

    def test_note_row(self, anchor):
        row = make_row(specification="(Aura heights / Iris Riverside)")
        decision = resolve_row(row, anchor)
        assert decision.skip_reason == SKIP_NOTE_ROW

    def test_note_checked_before_continuation(self):
        """A note under no project is a note, not an orphan."""
        row = make_row(specification="(Phase 2)")
        assert resolve_row(row, None).skip_reason == SKIP_NOTE_ROW

    def test_continuation_inherits(self, anchor):
        row = make_row(specification="3BHK", tower="T2")
        decision = resolve_row(row, anchor)

        assert decision.is_valid
        assert decision.inherited is True
        assert decision.row['builder'] == "B"
        assert decision.row['projectName'] == "P"
        assert decision.row['location'] == "L"
        assert decision.row['salesPerson'] == "Asha 9876543210"
        assert decision.row['landParcel'] == "5 Acre"
        assert decision.row['launchDate'] == "2024"
        assert decision.row['tower'] == "T2"

    def test_continuation_keeps_own_shared_values(self, anchor):
        row = make_row(specification="3BHK", location="Thane", salesPerson="Ravi")
        resolved = resolve_row(row, anchor).row
        assert resolved['location'] == "Thane"
        assert resolved['salesPerson'] == "Ravi"

    def test_orphan_continuation(self):
        row = make_row(specification="3BHK", location="L")
        decision = resolve_row(row, None)
        assert not decision.is_valid
        assert decision.skip_reason == SKIP_ORPHAN_CONTINUATION

    @pytest.mark.parametrize("missing", ["builder", "projectName", "location"])
    def test_missing_required(self, anchor, anchor_row, missing):
        """Only one of builder/project name empty is not a continuation."""
        anchor_row[missing] = ''
        decision = resolve_row(anchor_row, anchor)
        assert decision.skip_reason == SKIP_MISSING_REQUIRED

    def test_anchor_without_location_cannot_fill_continuation(self):
        anchor = ProjectAnchor(builder="B", project_name="P")
        row = make_row(specification="3BHK")
        assert resolve_row(row, anchor).skip_reason == SKIP_MISSING_REQUIRED

    def test_inherit_from_does_not_mutate_input(self, anchor):
        row = make_row(specification="3BHK")
        inherit_from(row, anchor)
        assert row['builder'] == ''

    @pytest.mark.parametrize("spec,expected", [
        ("(note)", True),
        ("2BHK (Premium)", False),
        ("(Premium) 2BHK", False),
        ("2BHK", False),
    ])
    def test_is_note(self, spec, expected):
        assert is_note(spec) is expected


# =============================================================================
# Entity Aggregator
# =============================================================================

class TestIds:

    def test_project_id(self):
        assert make_project_id("Lodha Group", "Palava City") == "proj_lodha_group_palava_city"

    def test_config_id_default_tower(self):
        assert make_config_id("proj_b_p", "2BHK") == "proj_b_p_2bhk_default"

    def test_config_id_with_tower(self):
        assert make_config_id("proj_b_p", "2 BHK", "Tower A") == "proj_b_p_2_bhk_tower_a"


class TestEntityAggregator:

    def test_first_row_defines_project(self, anchor_row):
        aggregator = EntityAggregator()
        project, config = aggregator.add(anchor_row)

        assert project.project_id == "proj_b_p"
        assert project.sales_person_name == "Asha"
        assert project.sales_person_phone == "9876543210"
        assert config.project_id == project.project_id
        assert config.config_id == "proj_b_p_2bhk_default"

    def test_same_key_reuses_project(self, anchor_row):
        aggregator = EntityAggregator()
        first, _ = aggregator.add(anchor_row)
        second_row = dict(anchor_row, specification="3BHK", location="Elsewhere")
        second, _ = aggregator.add(second_row)

        assert second is first
        assert second.location == "L"
        assert len(aggregator.projects) == 1
        assert len(aggregator.configurations) == 2

    def test_anchor_is_first_seen_row(self, anchor_row):
        aggregator = EntityAggregator()
        project, _ = aggregator.add(anchor_row)
        aggregator.add(dict(anchor_row, specification="3BHK", location="Elsewhere"))

        assert aggregator.anchor_for(project).location == "L"

    def test_identity_is_case_sensitive(self, anchor_row):
        aggregator = EntityAggregator()
        aggregator.add(dict(anchor_row, builder="ABC Corp"))
        aggregator.add(dict(anchor_row, builder="abc corp"))
        assert len(aggregator.projects) == 2

    def test_case_variant_projects_get_distinct_ids(self, anchor_row):
        aggregator = EntityAggregator()
        first, _ = aggregator.add(dict(anchor_row, builder="ABC Corp", projectName="Tower"))
        second, _ = aggregator.add(dict(anchor_row, builder="abc corp", projectName="tower"))
        third, _ = aggregator.add(dict(anchor_row, builder="ABC  Corp", projectName="Tower"))
        again, _ = aggregator.add(dict(anchor_row, builder="abc corp", projectName="tower"))

        assert first.project_id == "proj_abc_corp_tower"
        assert second.project_id == "proj_abc_corp_tower_2"
        assert third.project_id == "proj_abc_corp_tower_3"
        assert again is second
        assert [c.project_id for c in aggregator.configurations] == [
            "proj_abc_corp_tower",
            "proj_abc_corp_tower_2",
            "proj_abc_corp_tower_3",
            "proj_abc_corp_tower_2",
        ]

    def test_failed_row_does_not_reserve_an_id(self, anchor_row, monkeypatch):
        from services.csv_ingest import normalizers

        aggregator = EntityAggregator()
        aggregator.add(dict(anchor_row, builder="ABC Corp", projectName="Tower"))
        original = normalizers.parse_price_range
        monkeypatch.setattr(normalizers, 'parse_price_range', lambda text: 1 / 0)
        with pytest.raises(ZeroDivisionError):
            aggregator.add(dict(anchor_row, builder="abc corp", projectName="tower"))
        monkeypatch.setattr(normalizers, 'parse_price_range', original)

        project, _ = aggregator.add(dict(anchor_row, builder="Abc Corp", projectName="Tower"))
        assert project.project_id == "proj_abc_corp_tower_2"

    def test_duplicate_config_ids_are_kept(self, anchor_row):
        aggregator = EntityAggregator()
        aggregator.add(anchor_row)
        aggregator.add(anchor_row)
        ids = [c.config_id for c in aggregator.configurations]
        assert ids == ["proj_b_p_2bhk_default", "proj_b_p_2bhk_default"]

    def test_failed_configuration_registers_nothing(self, anchor_row, monkeypatch):
        from services.csv_ingest import normalizers

        def boom(text):
            raise RuntimeError("price exploded")

        monkeypatch.setattr(normalizers, 'parse_price_range', boom)
        aggregator = EntityAggregator()
        with pytest.raises(RuntimeError):
            aggregator.add(anchor_row)
        assert aggregator.projects == []
        assert aggregator.configurations == []

    def test_build_configuration_fields(self, anchor_row):
        row = dict(
            anchor_row,
            price="1.2cr",
            carpet="750",
            totalUnits="300",
            details="Sold out",
            amenities="All Amenities",
            imageUrl="x.png, https://img.example.com/a.jpg",
        )
        config = build_configuration(row, "proj_b_p")

        assert config.price_range.min == 120
        assert config.carpet_areas == [750]
        assert config.total_units == 300
        assert config.status == STATUS_SOLD_OUT
        assert config.amenities == ["All Amenities"]
        assert config.image_urls == ["https://img.example.com/a.jpg"]
        assert config.furniture_type == "unfurnished"
        assert config.raw_csv_row == row
        assert config.raw_csv_row is not row
