import pytest
from beanie import PydanticObjectId

from quizdeck.models.question import DEFAULT_EXPLANATION, Question
from quizdeck.models.report import Report, ReportStatus
from quizdeck.models.score import Score
from tests.conftest import make_questions


async def upload(client, payload):
    return await client.post("/api/admin/create-module", json=payload)


class TestCreateModule:
    @pytest.mark.asyncio
    async def test_create_module_stores_questions(self, client):
        response = await upload(client, make_questions("Algebra", 3))

        assert response.status_code == 201
        data = response.json()
        assert data["count"] == 3
        assert "Algebra" in data["message"]
        assert await Question.find(Question.moduleName == "Algebra").count() == 3

    @pytest.mark.asyncio
    async def test_explanation_defaults_when_missing(self, client):
        payload = make_questions("Algebra", 2)
        for q in payload:
            del q["explanation"]

        await upload(client, payload)

        stored = await Question.find_all().to_list()
        assert {q.explanation for q in stored} == {DEFAULT_EXPLANATION}

    @pytest.mark.asyncio
    async def test_reupload_replaces_instead_of_appending(self, client):
        payload = make_questions("Algebra", 4)

        await upload(client, payload)
        response = await upload(client, payload)

        assert response.status_code == 201
        assert response.json()["count"] == 4
        assert await Question.find(Question.moduleName == "Algebra").count() == 4

    @pytest.mark.asyncio
    async def test_reupload_leaves_other_modules_alone(self, client):
        await upload(client, make_questions("Algebra", 2))
        await upload(client, make_questions("Geometry", 5))
        await upload(client, make_questions("Algebra", 3))

        assert await Question.find(Question.moduleName == "Geometry").count() == 5
        assert await Question.find(Question.moduleName == "Algebra").count() == 3

    @pytest.mark.asyncio
    async def test_empty_array_is_rejected_without_mutation(self, client):
        await upload(client, make_questions("Algebra", 2))

        response = await upload(client, [])

        assert response.status_code == 400
        assert "non-empty" in response.json()["message"]
        assert await Question.find_all().count() == 2

    @pytest.mark.asyncio
    async def test_non_array_body_is_rejected(self, client):
        response = await upload(client, make_questions("Algebra", 1)[0])

        assert response.status_code == 400
        assert "message" in response.json()
        assert await Question.find_all().count() == 0

    @pytest.mark.asyncio
    async def test_invalid_json_is_rejected(self, client):
        response = await client.post(
            "/api/admin/create-module",
            content=b'[{"moduleName": "Algebra",',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Request body is not valid JSON."

    @pytest.mark.asyncio
    async def test_mixed_module_names_are_rejected(self, client):
        payload = make_questions("Algebra", 2) + make_questions("Geometry", 1)

        response = await upload(client, payload)

        assert response.status_code == 400
        assert "moduleName" in response.json()["message"]
        assert await Question.find_all().count() == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "field, value",
        [
            ("correct", 3),
            ("correct", -1),
            ("options", ["only one"]),
            ("moduleName", ""),
            ("question", None),
        ],
    )
    async def test_malformed_question_is_rejected(self, client, field, value):
        payload = make_questions("Algebra", 2)
        payload[1][field] = value

        response = await upload(client, payload)

        assert response.status_code == 400
        assert await Question.find_all().count() == 0


class TestListModules:
    @pytest.mark.asyncio
    async def test_no_modules(self, client):
        response = await client.get("/api/modules")

        assert response.status_code == 200
        assert response.json() == {"modules": []}

    @pytest.mark.asyncio
    async def test_distinct_module_names(self, client):
        await upload(client, make_questions("Algebra", 3))
        await upload(client, make_questions("Geometry", 2))

        response = await client.get("/api/modules")

        assert sorted(response.json()["modules"]) == ["Algebra", "Geometry"]


class TestDeleteModule:
    @pytest.mark.asyncio
    async def test_delete_removes_questions_scores_and_reports(self, client):
        await upload(client, make_questions("X", 3))
        await upload(client, make_questions("Y", 2))
        for module_name in ("X", "Y"):
            await Score.from_counts(module_name, "ana", 1, 1).insert()
            question = await Question.find_one(Question.moduleName == module_name)
            await Report(questionId=question.id, moduleName=module_name, reason="typo").insert()

        response = await client.delete("/api/admin/module/X")

        assert response.status_code == 200
        assert "X" in response.json()["message"]
        assert await Question.find(Question.moduleName == "X").count() == 0
        assert await Score.find(Score.moduleName == "X").count() == 0
        assert await Report.find(Report.moduleName == "X").count() == 0
        assert await Question.find(Question.moduleName == "Y").count() == 2
        assert await Score.find(Score.moduleName == "Y").count() == 1
        assert await Report.find(Report.moduleName == "Y").count() == 1

    @pytest.mark.asyncio
    async def test_delete_missing_module_succeeds(self, client):
        await upload(client, make_questions("Algebra", 2))

        response = await client.delete("/api/admin/module/Nope")

        assert response.status_code == 200
        assert await Question.find_all().count() == 2

    @pytest.mark.asyncio
    async def test_delete_percent_encoded_name(self, client):
        await upload(client, make_questions("Linear Algebra/2", 2))

        response = await client.delete("/api/admin/module/Linear%20Algebra%2F2")

        assert response.status_code == 200
        assert await Question.find_all().count() == 0


class TestReportModel:
    @pytest.mark.asyncio
    async def test_report_defaults(self, db):
        report = Report(questionId=PydanticObjectId(), moduleName="m", reason="wrong answer")

        assert report.status is ReportStatus.PENDING
        assert report.reportCount == 1
