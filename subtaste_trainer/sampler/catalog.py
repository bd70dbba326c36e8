"""
Static comparison catalog.

Twenty taste dimensions, four mutually exclusive prompts each. Every entry is
(id, topic, prompt, archetype_hint); topic is the diversity key the card
sampler spreads across.
"""

from __future__ import annotations

from typing import NamedTuple

ARCHETYPE_DESIGNATIONS = (
    "S-0",
    "T-1",
    "V-2",
    "L-3",
    "C-4",
    "N-5",
    "H-6",
    "P-7",
    "D-8",
    "F-9",
    "R-10",
    "Ø",
)


class CatalogEntry(NamedTuple):
    id: str
    topic: str
    prompt: str
    archetype_hint: str | None


_RAW_CATALOG: tuple[tuple[str, str, str, str | None], ...] = (
    # opening
    ("opening-blade", "opening", "Open with a blade: state the thesis in one line.", "R-10"),
    ("opening-scene", "opening", "Open with a scene; let the idea surface later.", "D-8"),
    ("opening-stat", "opening", "Open with a number that reframes the problem.", "T-1"),
    ("opening-question", "opening", "Open with a question the audience is afraid to ask.", "V-2"),
    # pacing
    ("pacing-rapid", "pacing", "Short, charged sentences. Keep the pulse high.", "F-9"),
    ("pacing-slow-burn", "pacing", "Slow burn: let tension build before any release.", "D-8"),
    ("pacing-stepwise", "pacing", "Step by step, one idea per beat.", "L-3"),
    ("pacing-staccato", "pacing", "Hard cuts between ideas, no connective tissue.", "C-4"),
    # tone
    ("tone-sharp", "tone", "Sharp and precise. No conversational filler.", "S-0"),
    ("tone-warm", "tone", "Warm and patient, like a mentor explaining twice.", "L-3"),
    ("tone-wry", "tone", "Wry, with a playful twist in every other line.", "N-5"),
    ("tone-urgent", "tone", "Urgent. Something is at stake right now.", "H-6"),
    # risk
    ("risk-bet", "risk", "Make a sharp bet. No hedging.", "R-10"),
    ("risk-balanced", "risk", "Weigh both sides and land on a careful middle.", "N-5"),
    ("risk-early", "risk", "Back the idea before anyone else has noticed it.", "V-2"),
    ("risk-proven", "risk", "Only commit to what already has proof behind it.", "T-1"),
    # visual density
    ("density-negative-space", "visual-density", "Lots of negative space; one element per frame.", "C-4"),
    ("density-layered", "visual-density", "Layered, maximal frames that reward a second look.", "D-8"),
    ("density-diagram", "visual-density", "Diagrams and labels over decoration.", "T-1"),
    ("density-editorial", "visual-density", "Editorial polish: restrained type, perfect crops.", "S-0"),
    # payoff
    ("payoff-now", "payoff", "Payoff now. No suspense, no detours.", "F-9"),
    ("payoff-delayed", "payoff", "Hold the payoff until the last frame.", "D-8"),
    ("payoff-open", "payoff", "Leave the ending open for the audience to finish.", "V-2"),
    ("payoff-checklist", "payoff", "End on a checklist the viewer can act on today.", "L-3"),
    # evidence
    ("evidence-receipts", "evidence", "Receipts: data, references, citations.", "T-1"),
    ("evidence-anecdote", "evidence", "One vivid personal anecdote beats a chart.", "H-6"),
    ("evidence-lineage", "evidence", "Show who came before and what they proved.", "P-7"),
    ("evidence-demo", "evidence", "Just show it working; skip the argument.", "F-9"),
    # structure
    ("structure-arc", "structure", "Story-led arcs with characters and stakes.", "D-8"),
    ("structure-framework", "structure", "Frameworks and playbooks with numbered steps.", "T-1"),
    ("structure-collage", "structure", "Collage: fragments that add up to a mood.", "N-5"),
    ("structure-manifesto", "structure", "Manifesto: a list of beliefs, stated flatly.", "R-10"),
    # voice
    ("voice-personal", "voice", "Personal voice, first person, unguarded.", "H-6"),
    ("voice-institutional", "voice", "Measured, institutional voice that earns trust.", "S-0"),
    ("voice-chorus", "voice", "Many voices: quotes, stitches, replies.", "N-5"),
    ("voice-oracle", "voice", "Oracle voice: short pronouncements, no explanation.", "V-2"),
    # palette
    ("palette-monochrome", "palette", "Monochrome, brutalist, high contrast.", "C-4"),
    ("palette-saturated", "palette", "Saturated colour that stops the scroll.", "F-9"),
    ("palette-archival", "palette", "Archival tones: film grain, faded print.", "P-7"),
    ("palette-signature", "palette", "One signature colour used everywhere.", "S-0"),
    # format
    ("format-carousel", "format", "Carousels that teach in ten swipes.", "L-3"),
    ("format-longform", "format", "Deep-dive longform with thoughtful pacing.", "T-1"),
    ("format-short", "format", "Fast, punchy shorts under fifteen seconds.", "F-9"),
    ("format-thread", "format", "Threads that argue one point at a time.", "R-10"),
    # cadence
    ("cadence-daily", "cadence", "Ship something every day, even if small.", "F-9"),
    ("cadence-drops", "cadence", "Rare, heavy drops that feel like events.", "S-0"),
    ("cadence-series", "cadence", "Numbered series the audience can follow.", "L-3"),
    ("cadence-reactive", "cadence", "Post when the moment calls for it.", "H-6"),
    # hook
    ("hook-contrarian", "hook", "Start with a heresy that splits the room.", "R-10"),
    ("hook-curiosity", "hook", "Open a curiosity gap and make them wait.", "D-8"),
    ("hook-promise", "hook", "Promise a concrete outcome in the first line.", "L-3"),
    ("hook-reference", "hook", "Hook with a reference only insiders will catch.", "P-7"),
    # lineage
    ("lineage-roots", "lineage", "Root every idea in its lineage and influences.", "P-7"),
    ("lineage-fresh", "lineage", "Chase what is new; ignore the canon.", "V-2"),
    ("lineage-remix", "lineage", "Remix two traditions that never met.", "N-5"),
    ("lineage-canon", "lineage", "Build the canon others will cite later.", "S-0"),
    # community
    ("community-discourse", "community", "The comments are part of the work.", "H-6"),
    ("community-broadcast", "community", "Broadcast, do not converse.", "C-4"),
    ("community-mentor", "community", "Answer every question as if it matters.", "L-3"),
    ("community-campaign", "community", "Rally people around a cause.", "H-6"),
    # polish
    ("polish-perfect", "polish", "High polish; nothing ships until it is right.", "S-0"),
    ("polish-raw", "polish", "Raw and unedited; speed over finish.", "F-9"),
    ("polish-crafted-rough", "polish", "Crafted roughness: deliberate imperfection.", "C-4"),
    ("polish-systematic", "polish", "Templates and systems keep quality steady.", "T-1"),
    # novelty
    ("novelty-odd-formats", "novelty", "Try odd formats if the idea feels alive, even if it may flop.", "V-2"),
    ("novelty-refine", "novelty", "Refine one proven format until it is perfect.", "S-0"),
    ("novelty-hybrid", "novelty", "Blend opposites into a hybrid nobody expected.", "N-5"),
    ("novelty-trend", "novelty", "Ride the current trend while it is hot.", "D-8"),
    # clarity
    ("clarity-literal", "clarity", "Direct, literal, step-by-step.", "T-1"),
    ("clarity-symbolic", "clarity", "Symbolism and mood over explanation.", "D-8"),
    ("clarity-minimal", "clarity", "Say less. Cut until it hurts.", "C-4"),
    ("clarity-provocative", "clarity", "Clear enough to provoke, vague enough to debate.", "R-10"),
    # ending
    ("ending-call-to-action", "ending", "End with one action the audience must take.", "F-9"),
    ("ending-callback", "ending", "End with a callback to the first line.", "P-7"),
    ("ending-silence", "ending", "End on silence; no summary.", "C-4"),
    ("ending-invitation", "ending", "End by inviting the audience to reply.", "H-6"),
    # persona
    ("persona-expert", "persona", "Present as the expert in the room.", "S-0"),
    ("persona-peer", "persona", "Present as a peer figuring it out too.", "L-3"),
    ("persona-outsider", "persona", "Present as the outsider who sees what insiders miss.", "R-10"),
    ("persona-archivist", "persona", "Present as the archivist of a scene.", "P-7"),
)

STATIC_CATALOG: tuple[CatalogEntry, ...] = tuple(CatalogEntry(*row) for row in _RAW_CATALOG)
