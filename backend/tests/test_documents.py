def test_create_note_and_link(client, headers):
    note = client.post("/documents", json={"title": " Notes ", "content": "Body"}, headers=headers).json()
    assert note["title"] == "Notes"
    assert note["doc_type"] == "note"
    assert note["file_url"] is None

    link = client.post("/documents", json={"title": "Spec", "url": "https://example.com/spec"}, headers=headers).json()
    assert link["doc_type"] == "link"
    assert link["content"] == "URL: https://example.com/spec"


def test_create_requires_title_and_content_or_url(client, headers):
    assert client.post("/documents", json={"title": " ", "content": "x"}, headers=headers).status_code == 400
    assert client.post("/documents", json={"title": "T"}, headers=headers).status_code == 400


def test_update_and_delete_are_owner_scoped(client, headers, other_headers):
    doc = client.post("/documents", json={"title": "T", "content": "C"}, headers=headers).json()

    assert client.patch(f"/documents/{doc['id']}", json={"title": "X"}, headers=other_headers).status_code == 404
    r = client.patch(f"/documents/{doc['id']}", json={"title": "New", "metadata": {"tag": "a"}}, headers=headers)
    assert r.json()["title"] == "New"
    assert r.json()["metadata"] == {"tag": "a"}

    assert client.delete(f"/documents/{doc['id']}", headers=other_headers).status_code == 404
    assert client.delete(f"/documents/{doc['id']}", headers=headers).status_code == 200
    assert client.get("/documents", headers=headers).json() == []


def test_query_requires_documents(client, headers, gateway):
    r = client.post("/documents/query", json={"query": "anything"}, headers=headers)
    assert r.status_code == 400
    assert gateway.calls == []


def test_query_stores_history(client, headers, gateway):
    client.post("/documents", json={"title": "Policy", "content": "Refunds within 30 days."}, headers=headers)
    gateway.content = (
        '{"answer": "Within 30 days [1].", "citations": [1], "summary": "",'
        ' "actionItems": ["File the refund"], "confidence": "high"}'
    )

    r = client.post("/documents/query", json={"query": "Refund window?"}, headers=headers)

    assert r.status_code == 200
    assert r.json()["result"]["actionItems"] == ["File the refund"]
    assert "[1] Policy:\nRefunds within 30 days." in gateway.system_prompt
    assert gateway.calls[0]["messages"][1] == {"role": "user", "content": "Refund window?"}

    history = client.get("/documents/queries", headers=headers).json()
    assert history[0]["query"] == "Refund window?"
    assert history[0]["response"] == "Within 30 days [1]."
    assert history[0]["citations"] == [1]


def test_failed_query_is_not_stored(client, headers, gateway):
    client.post("/documents", json={"title": "T", "content": "C"}, headers=headers)
    gateway.status = 500
    r = client.post("/documents/query", json={"query": "Q"}, headers=headers)
    assert r.status_code == 500
    assert r.json() == {"error": "AI gateway error: 500"}
    assert client.get("/documents/queries", headers=headers).json() == []
