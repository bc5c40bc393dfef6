"""
Property-based tests for environment configuration validation.
Uses Hypothesis to generate CIDRs and configurations and checks the rules hold.
"""

from hypothesis import given, strategies as st
from hypothesis.strategies import composite

from stack_test_helpers import valid_config
from common.validation import validate_cidr, validate_environment_config

octets = st.integers(min_value=0, max_value=255)
masks = st.integers(min_value=0, max_value=32)


@composite
def private_cidr(draw):
    """Generate well-formed CIDRs inside the three RFC 1918 ranges."""
    first, second = draw(
        st.one_of(
            st.tuples(st.just(10), octets),
            st.tuples(st.just(172), st.integers(min_value=16, max_value=31)),
            st.tuples(st.just(192), st.just(168)),
        )
    )
    return f"{first}.{second}.{draw(octets)}.{draw(octets)}/{draw(masks)}"


@composite
def cidr_with_octet_too_large(draw):
    parts = [str(draw(octets)) for _ in range(4)]
    position = draw(st.integers(min_value=0, max_value=3))
    parts[position] = str(draw(st.integers(min_value=256, max_value=999)))
    return f"{'.'.join(parts)}/{draw(masks)}"


@given(private_cidr())
def test_private_cidrs_are_accepted(cidr):
    assert validate_cidr(cidr)


@given(private_cidr(), st.integers(min_value=33, max_value=99))
def test_masks_above_32_are_rejected(cidr, mask):
    address = cidr.split("/")[0]
    assert not validate_cidr(f"{address}/{mask}")


@given(cidr_with_octet_too_large())
def test_octets_above_255_are_rejected(cidr):
    assert not validate_cidr(cidr)


@given(st.text())
def test_validate_cidr_never_raises(text):
    assert validate_cidr(text) in (True, False)


@given(st.integers().filter(lambda azs: azs < 2 or azs > 3))
def test_out_of_range_azs_give_one_az_violation(azs):
    violations = validate_environment_config(valid_config(max_availability_zones=azs))
    az_violations = [v for v in violations if v.field == "max_availability_zones"]
    assert len(az_violations) == 1


@given(
    st.sets(st.sampled_from(["Application", "Environment", "ManagedBy"])),
)
def test_one_violation_per_missing_tag(present):
    tags = {key: "value" for key in present}
    violations = validate_environment_config(valid_config(tags=tags))
    tag_violations = [v for v in violations if v.field == "tags"]
    assert len(tag_violations) == 3 - len(present)


@given(
    name=st.text(max_size=10),
    cidr=st.text(max_size=20),
    azs=st.one_of(st.none(), st.integers(), st.text(max_size=3)),
    nat=st.one_of(st.none(), st.integers()),
    tags=st.dictionaries(st.text(max_size=12), st.text(max_size=12), max_size=4),
)
def test_validation_never_raises_and_is_idempotent(name, cidr, azs, nat, tags):
    config = valid_config(
        name=name,
        vpc_cidr_block=cidr,
        max_availability_zones=azs,
        nat_gateway_count=nat,
        tags=tags,
    )
    first = validate_environment_config(config, strict_environment_tag=True)
    assert first == validate_environment_config(config, strict_environment_tag=True)
