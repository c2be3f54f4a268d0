"""
Basic usage example for the crossquote library.

This example demonstrates the core workflow:
1. Build a document store holding a bilingual unit
2. Align an English excerpt into French
3. Verify excerpt claims, including one with a wrong reference
4. Output the findings as a JSON report
"""

import json

from crossquote import ExcerptClaim, ExcerptEngine, summarize_validation, to_report
from crossquote.data import InMemoryDocumentStore


DOCUMENTS = {
    "en": {
        "16.50": "Questioner: Can you tell me of the veil? Ra: I am Ra. The veil is the forgetting that each incarnation brings.",
        "16.51": "Questioner: What is love? Ra: I am Ra. Love is unity. It is the Creator.",
    },
    "fr": {
        "16.50": "Questionneur: Pouvez-vous me parler du voile? Ra: Je suis Ra. Le voile est l'oubli que chaque incarnation apporte.",
        "16.51": "Questionneur: Qu'est-ce que l'amour? Ra: Je suis Ra. L'amour est l'unité. C'est le Créateur.",
    },
}


def main():
    store = InMemoryDocumentStore(DOCUMENTS)
    engine = ExcerptEngine(store)

    # Step 1: Align
    print("Step 1: Aligning excerpt into French...")
    claim = ExcerptClaim(reference="16.51", excerpts={"en": "Love is unity."})
    aligned = engine.align_one(claim, "fr")
    print(f"   {aligned}")
    if aligned.is_aligned:
        print(f"   fr: {aligned.text}")

    # Step 2: Verify
    print("\nStep 2: Verifying claims...")
    claims = [
        claim,
        ExcerptClaim(reference="16.50", excerpts={"en": "Love is unity. It is the Creator."}),
        ExcerptClaim(reference="99.1", excerpts={"en": "Something that was never said."}),
    ]
    results = list(engine.verify_many(claims))
    for result in results:
        print(f"   {result}")

    # Step 3: Report
    print("\nStep 3: Summary and report...")
    print(json.dumps(summarize_validation(results), indent=2))
    print(json.dumps(to_report(r for r in results if r.is_finding), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
