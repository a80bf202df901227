import pytest


def test_generate_returns_model_text(client, text_model):
    response = client.post("/api/generate", json={"prompt": "Name three rivers"})

    assert response.status_code == 200
    assert response.json() == {"result": "Generated text"}
    assert text_model.prompts == ["Name three rivers"]


@pytest.mark.parametrize(
    "body",
    [
        {"prompt": ""},
        {"prompt": 42},
        {"prompt": None},
        {"prompt": ["a", "b"]},
        {},
    ],
)
def test_generate_rejects_bad_prompt_without_model_call(client, text_model, body):
    response = client.post("/api/generate", json=body)

    assert response.status_code == 400
    assert "message" in response.json()
    assert text_model.prompts == []


def test_generate_rejects_non_json_body(client, text_model):
    response = client.post(
        "/api/generate", content=b"prompt=hi", headers={"content-type": "text/plain"}
    )

    assert response.status_code == 400
    assert text_model.prompts == []


def test_generate_hides_provider_error(client, text_model):
    text_model.error = RuntimeError("upstream said: invalid api key sk-123")

    response = client.post("/api/generate", json={"prompt": "hello"})

    assert response.status_code == 500
    assert response.json() == {"message": "Failed to generate AI response"}
