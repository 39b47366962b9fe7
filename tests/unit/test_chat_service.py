import pytest
from conftest import NOW, FakeIndex, make_doc, scored

from worklog_chat.chat.service import ChatService
from worklog_chat.exceptions import EmptyIndexError, IndexUnavailable
from worklog_chat.generation.answer_generator import AnswerGenerator
from worklog_chat.generation.prompt_templates import ANSWER_SYSTEM, NO_DATA_ANSWER, TEMPORAL_FOCUS
from worklog_chat.models.schemas import ChatRequest
from worklog_chat.retrieval.selector import RetrievalSelector


def build_service(index, llm):
    return ChatService(
        index=index,
        selector=RetrievalSelector(index),
        generator=AnswerGenerator(llm=llm),
        clock=lambda: NOW,
    )


@pytest.mark.asyncio
async def test_unavailable_index_raises(llm):
    service = build_service(FakeIndex(available=False), llm)
    with pytest.raises(IndexUnavailable):
        await service.process_query(ChatRequest(query="last week"))


@pytest.mark.asyncio
async def test_empty_index_raises(llm):
    index = FakeIndex(has_data=False)
    service = build_service(index, llm)
    with pytest.raises(EmptyIndexError):
        await service.process_query(ChatRequest(query="last week"))
    assert index.calls == []


@pytest.mark.asyncio
async def test_no_context_skips_generation(llm):
    service = build_service(FakeIndex([scored(make_doc("2024-01-02.md"), 0.9)]), llm)

    response = await service.process_query(ChatRequest(query="budget planning"))

    assert response.answer == NO_DATA_ANSWER
    assert response.sources == []
    assert response.documents_found == 0
    assert response.is_temporal_query is False
    assert llm.prompts == []


@pytest.mark.asyncio
async def test_temporal_answer(llm):
    newer = make_doc("logs/2024-09-17.md", "Deployed the Connect flow")
    older = make_doc("logs/2024-09-12.md", "Budget review")
    service = build_service(FakeIndex([scored(older), scored(newer)]), llm)

    response = await service.process_query(ChatRequest(query="  what did I do last week  "))

    assert response.answer == "You worked on the Connect rollout."
    assert response.sources == ["logs/2024-09-12.md", "logs/2024-09-17.md"]
    assert response.is_temporal_query is True
    assert response.documents_found == 2

    prompt = llm.prompts[0]
    assert "Today's date is 2024-09-18." in prompt
    assert TEMPORAL_FOCUS in prompt
    assert "[2024-09-17] Deployed the Connect flow\n\n---\n\n[2024-09-12] Budget review" in prompt
    assert prompt.rstrip().endswith("what did I do last week\n\nDetailed Answer:")
    assert llm.systems == [ANSWER_SYSTEM]


@pytest.mark.asyncio
async def test_max_results_limits_content_context(llm):
    docs = [make_doc(f"2024-09-0{i + 1}.md", f"deploy step {i}") for i in range(5)]
    service = build_service(FakeIndex([scored(d, 0.2) for d in docs]), llm)

    response = await service.process_query(ChatRequest(query="deploy steps", max_results=2))

    assert response.documents_found == 2
    assert response.sources == ["2024-09-01.md", "2024-09-02.md"]


@pytest.mark.asyncio
async def test_generated_answer_is_stripped(llm):
    llm.answer = "\n  Budget done.  \n"
    service = build_service(FakeIndex([scored(make_doc("2024-09-01.md", "budget"))]), llm)

    response = await service.process_query(ChatRequest(query="budget"))

    assert response.answer == "Budget done."
