"""
Step definitions for DNS record tools integration tests.
"""

import csv
import json

from behave import given, then, when

from dns_record_tools.constants import TRUNCATION_NOTICE
from dns_record_tools.core.dns_manager import DNSManager
from dns_record_tools.parsers.csv import CSVParser

SAMPLE_CONTENT = {
    "A": "192.0.2.{i}",
    "CNAME": "target{i}.example.net",
    "MX": "mx{i}.example.net",
    "TXT": "token-{i}",
}


def _record_count(context):
    return len(context.dns_manager.dns_client.list_records(context.test_zone_id, None, 1, 5000))


def _respond(context, response):
    context.response = response
    context.output = None if response.is_error else json.loads(response.text)


@given('the zone contains {count:d} "{record_type}" records')
def step_impl(context, count, record_type):
    """Seed the zone with records of one type."""
    start = len(context.seed_records)
    for i in range(count):
        n = start + i + 1
        context.seed_records.append(
            {
                "type": record_type,
                "name": f"{record_type.lower()}{n}",
                "content": SAMPLE_CONTENT[record_type].format(i=n),
                "priority": 10 if record_type == "MX" else None,
            }
        )


@given('the zone contains a "{record_type}" record "{name}" with content "{content}"')
def step_impl(context, record_type, name, content):
    context.seed_records.append(
        {"id": f"rec-{name}", "type": record_type, "name": name, "content": content}
    )


@given("the DNS record tools are configured with the memory Directory")
def step_impl(context):
    context.dns_manager = DNSManager(context.test_config)
    assert context.dns_manager is not None


@given("the response size limit is {limit:d} characters")
def step_impl(context, limit):
    context.dns_manager.character_limit = limit


@given("I have a CSV file with 3 valid records and 1 record without content")
def step_impl(context):
    """Create a CSV file where the second record has no content."""
    rows = [
        {"type": "A", "name": "one", "content": "192.0.2.1"},
        {"type": "TXT", "name": "two", "content": ""},
        {"type": "A", "name": "three", "content": "192.0.2.3"},
        {"type": "CNAME", "name": "four", "content": "one.test.example.com"},
    ]
    context.csv_file = context.test_data_dir / f"{context.scenario_name.replace(' ', '_')}.csv"
    with open(context.csv_file, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=["type", "name", "content"])
        writer.writeheader()
        writer.writerows(rows)


@given("I have a batch of 5 records where record 3 duplicates record 1")
def step_impl(context):
    context.batch = [
        {"type": "A", "name": f"host{i}", "content": f"192.0.2.{i}"} for i in range(1, 6)
    ]
    context.batch[2] = dict(context.batch[0])


@when("I list the records with summary_only")
def step_impl(context):
    _respond(context, context.dns_manager.list_records(context.test_zone_id, summary_only=True))


@when("I list the records with summary_only and random_sample")
def step_impl(context):
    _respond(
        context,
        context.dns_manager.list_records(
            context.test_zone_id, summary_only=True, random_sample=True
        ),
    )


@when("I list a random sample of {sample_size:d} records")
def step_impl(context, sample_size):
    _respond(
        context,
        context.dns_manager.list_records(
            context.test_zone_id, random_sample=True, sample_size=sample_size
        ),
    )


@when("I list page {page:d} with {per_page:d} records per page")
def step_impl(context, page, per_page):
    response = context.dns_manager.list_records(
        context.test_zone_id, page=page, per_page=per_page
    )
    context.response = response
    if not response.is_error and not response.text.endswith(TRUNCATION_NOTICE):
        context.output = json.loads(response.text)


@when('I list the "{record_type}" records')
def step_impl(context, record_type):
    _respond(context, context.dns_manager.list_records(context.test_zone_id, filter_type=record_type))


@when("I bulk create the records from the CSV file")
def step_impl(context):
    records = CSVParser(str(context.csv_file)).parse()
    _respond(context, context.dns_manager.bulk_create(context.test_zone_id, records))


@when("I bulk create the batch")
def step_impl(context):
    _respond(context, context.dns_manager.bulk_create(context.test_zone_id, context.batch))


@when("I bulk create {count:d} records")
def step_impl(context, count):
    records = [{"type": "TXT", "name": f"bulk{i}", "content": "x"} for i in range(count)]
    _respond(context, context.dns_manager.bulk_create(context.test_zone_id, records))


@when('I bulk update the "{name}" record to content "{content}"')
def step_impl(context, name, content):
    _respond(
        context,
        context.dns_manager.bulk_update(
            context.test_zone_id, [{"record_id": f"rec-{name}", "content": content}]
        ),
    )


@when('I delete the "{name}" record without confirmation')
def step_impl(context, name):
    _respond(context, context.dns_manager.delete_record(context.test_zone_id, f"rec-{name}"))


@then("the response is not an error")
def step_impl(context):
    assert not context.response.is_error, context.response.text


@then('the response is an error starting with "{prefix}"')
def step_impl(context, prefix):
    assert context.response.is_error
    assert context.response.text.startswith(prefix), context.response.text


@then("the summary total is {total:d}")
def step_impl(context, total):
    assert context.output["summary"]["total"] == total


@then('the summary counts {a:d} "A", {cname:d} "CNAME", {mx:d} "MX" and {txt:d} "TXT" records')
def step_impl(context, a, cname, mx, txt):
    expected = {"A": a, "CNAME": cname, "MX": mx, "TXT": txt}
    assert context.output["summary"]["by_type"] == expected, context.output["summary"]


@then("the response has a summary")
def step_impl(context):
    assert "summary" in context.output


@then("the response has no records")
def step_impl(context):
    assert "records" not in context.output


@then("the sample reports {total:d} records in the zone")
def step_impl(context, total):
    assert context.output["sample"]["total_in_zone"] == total


@then("the response contains {count:d} distinct records")
def step_impl(context, count):
    assert len({record["id"] for record in context.output["records"]}) == count


@then("the pagination shows {count:d} records of {total:d} with no more pages")
def step_impl(context, count, total):
    pagination = context.output["pagination"]
    assert pagination["count"] == count, pagination
    assert pagination["total"] == total, pagination
    assert pagination["has_more"] is False
    assert len(context.output["records"]) == count


@then('every listed record has type "{record_type}"')
def step_impl(context, record_type):
    assert all(record["type"] == record_type for record in context.output["records"])


@then("the response ends with the truncation notice")
def step_impl(context):
    assert context.response.text.endswith(TRUNCATION_NOTICE)
    assert len(context.response.text) <= context.dns_manager.character_limit + len(TRUNCATION_NOTICE)


@then("{created:d} records were created and {failed:d} failed out of {total:d}")
def step_impl(context, created, failed, total):
    output = context.output
    assert (output["created"], output["failed"], output["total"]) == (created, failed, total), output


@then("{updated:d} records were updated and {failed:d} failed out of {total:d}")
def step_impl(context, updated, failed, total):
    output = context.output
    assert (output["updated"], output["failed"], output["total"]) == (updated, failed, total), output


@then('result {position:d} failed with an error starting with "{prefix}"')
def step_impl(context, position, prefix):
    result = context.output["results"][position - 1]
    assert result["success"] is False
    assert result["error"].startswith(prefix), result


@then("the results are in input order")
def step_impl(context):
    indexes = [result["index"] for result in context.output["results"]]
    assert indexes == list(range(len(indexes)))


@then("the zone now has {count:d} records")
def step_impl(context, count):
    assert _record_count(context) == count


@then('the "{name}" record has content "{content}"')
def step_impl(context, name, content):
    record = context.dns_manager.dns_client.get_record(context.test_zone_id, f"rec-{name}")
    assert record["content"] == content
