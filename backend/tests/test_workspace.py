import io

from docx import Document as DocxDocument

from hub.services.resumes import clean_text


def test_profile_created_on_first_request(client, headers, user_id):
    r = client.get("/profile", headers=headers)
    assert r.status_code == 200
    assert r.json()["id"] == str(user_id)
    assert r.json()["email"] == "ada@example.com"

    r = client.patch("/profile", json={"full_name": "Ada Lovelace"}, headers=headers)
    assert r.json()["full_name"] == "Ada Lovelace"
    assert r.json()["email"] == "ada@example.com"


def test_upload_txt_resume(client, headers, other_headers):
    files = {"file": ("resume.txt", "Café   engineer\n\n\n\nPython".encode("utf-8"), "text/plain")}
    r = client.post("/resumes/upload", files=files, headers=headers)
    assert r.status_code == 200
    body = r.json()
    assert body["content"] == "Cafe engineer\n\nPython"
    assert body["parsed_data"] == {"chars": len(body["content"])}

    assert len(client.get("/resumes", headers=headers).json()) == 1
    assert client.get("/resumes", headers=other_headers).json() == []
    assert client.get(f"/resumes/{body['id']}", headers=other_headers).status_code == 404


def test_upload_docx_resume(client, headers):
    doc = DocxDocument()
    doc.add_paragraph("Jane Doe")
    doc.add_paragraph("Senior Data Engineer")
    buf = io.BytesIO()
    doc.save(buf)

    files = {"file": ("cv.docx", buf.getvalue(), "application/octet-stream")}
    r = client.post("/resumes/upload", files=files, headers=headers)
    assert r.status_code == 200
    assert "Jane Doe\nSenior Data Engineer" in r.json()["content"]


def test_upload_rejects_unsupported_and_empty(client, headers):
    r = client.post("/resumes/upload", files={"file": ("cv.png", b"\x89PNG", "image/png")}, headers=headers)
    assert r.status_code == 415
    r = client.post("/resumes/upload", files={"file": ("cv.txt", b"   \n ", "text/plain")}, headers=headers)
    assert r.status_code == 422


def test_clean_text_strips_control_characters():
    assert clean_text("a\x00\x01b\t\tc") == "a b c"


def test_ats_scan_is_stored(client, headers, gateway):
    gateway.content = (
        '{"score": 72, "missingKeywords": ["Airflow", "dbt"], "weakSections": ["Skills"],'
        ' "suggestions": [{"category": "keywords", "priority": "high", "suggestion": "Add Airflow"}],'
        ' "optimizedSummary": "Data engineer.", "optimizedBullets": ["Built pipelines"]}'
    )
    r = client.post("/ats-scans", json={"target_role": "Data Engineer", "resume_content": "Python"}, headers=headers)
    assert r.status_code == 200
    assert r.json()["result"]["weakSections"] == ["Skills"]

    scan = client.get("/ats-scans", headers=headers).json()[0]
    assert scan["ats_score"] == 72
    assert scan["missing_keywords"] == ["Airflow", "dbt"]
    assert scan["suggestions"][0]["suggestion"] == "Add Airflow"
    assert scan["optimized_resume"] == "Data engineer.\n- Built pipelines"


def test_ats_scan_from_stored_resume_and_fallback(client, headers, gateway):
    files = {"file": ("resume.txt", b"Kotlin developer", "text/plain")}
    resume = client.post("/resumes/upload", files=files, headers=headers).json()
    gateway.content = "no json here"

    r = client.post("/ats-scans", json={"target_role": "Android", "resume_id": resume["id"]}, headers=headers)

    assert r.json()["result"] == {"score": 50, "suggestions": [], "rawAnalysis": "no json here"}
    assert "Kotlin developer" in gateway.calls[0]["messages"][1]["content"]
    assert client.get("/ats-scans", headers=headers).json()[0]["ats_score"] == 50


def test_ats_scan_needs_a_resume(client, headers, other_headers, gateway):
    assert client.post("/ats-scans", json={"target_role": "X"}, headers=headers).status_code == 400
    files = {"file": ("resume.txt", b"text", "text/plain")}
    resume = client.post("/resumes/upload", files=files, headers=headers).json()
    r = client.post("/ats-scans", json={"target_role": "X", "resume_id": resume["id"]}, headers=other_headers)
    assert r.status_code == 404
    assert gateway.calls == []


def test_job_application_is_stored(client, headers, gateway):
    gateway.content = '{"bullets": ["Led X", "Built Y"], "coverLetter": "Dear team", "summary": "Strong fit"}'
    r = client.post(
        "/job-applications",
        json={"job_description": "Backend role", "resume_content": "Python", "tone": "confident"},
        headers=headers,
    )
    assert r.status_code == 200
    assert "Use a confident tone." in gateway.system_prompt

    row = client.get("/job-applications", headers=headers).json()[0]
    assert row["generated_bullets"] == "Led X\nBuilt Y"
    assert row["cover_letter"] == "Dear team"
    assert row["summary"] == "Strong fit"
    assert row["settings"] == {"tone": "confident"}


def test_job_application_credits_exhausted_stores_nothing(client, headers, gateway):
    gateway.status = 402
    r = client.post("/job-applications", json={"job_description": "d", "resume_content": "r"}, headers=headers)
    assert r.status_code == 402
    assert r.json() == {"error": "AI credits exhausted. Please add funds."}
    assert client.get("/job-applications", headers=headers).json() == []


def test_healthz(client):
    r = client.get("/healthz")
    assert r.json()["status"] == "ok"


def test_deleting_resume_clears_references(client, headers, gateway):
    files = {"file": ("resume.txt", b"Go developer", "text/plain")}
    resume = client.post("/resumes/upload", files=files, headers=headers).json()
    client.post(
        "/job-applications",
        json={"job_description": "Backend role", "resume_id": resume["id"]},
        headers=headers,
    )
    client.post("/ats-scans", json={"target_role": "Backend", "resume_id": resume["id"]}, headers=headers)
    assert client.get("/job-applications", headers=headers).json()[0]["resume_id"] == resume["id"]

    assert client.delete(f"/resumes/{resume['id']}", headers=headers).status_code == 200

    assert client.get("/job-applications", headers=headers).json()[0]["resume_id"] is None
    assert client.get("/ats-scans", headers=headers).json()[0]["resume_id"] is None


def test_serve_runs_uvicorn_with_settings(monkeypatch):
    import uvicorn

    from hub import main

    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda app, **kw: calls.append((app, kw)))
    main.serve()
    s = main.settings
    assert calls == [("hub.main:app", {"host": s.host, "port": s.port, "log_level": s.log_level.lower()})]
