"""BDD tests for review submission."""

from protean.exceptions import ValidationError
from pytest_bdd import parsers, scenarios, then, when
from shared.errors import ConflictError

scenarios("features/review_submission.feature")


@when(parsers.cfparse('"{email}" submits a {rating:d} star review'))
def submit_review(lifecycle, product, outcome, email, rating):
    try:
        outcome["review"] = lifecycle.submit(
            product_id=product.id,
            reviewer_name=email.split("@")[0],
            reviewer_email=email,
            rating=rating,
            comment=f"{rating} stars",
        )
    except (ValidationError, ConflictError) as exc:
        outcome["exc"] = exc


@then("the submission succeeds")
def submission_succeeds(outcome):
    assert outcome["exc"] is None
    assert outcome["review"] is not None


@then("the submission fails with a validation error")
def submission_invalid(outcome):
    assert isinstance(outcome["exc"], ValidationError)
    assert outcome["review"] is None


@then("the submission fails with a conflict")
def submission_conflicts(outcome):
    assert isinstance(outcome["exc"], ConflictError)
