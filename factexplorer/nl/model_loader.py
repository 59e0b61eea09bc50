import logging
import os
from typing import Tuple

import torch
from transformers import AutoTokenizer, AutoModelForCausalLM
from factexplorer.settings import NLFILTER_MODEL_ID, NLFILTER_MAX_NEW_TOKENS, TRANSFORMERS_CACHE

log = logging.getLogger(__name__)

# Tell Hugging Face to use fast transfer if available
os.environ.setdefault("HF_HUB_ENABLE_HF_TRANSFER", "1")

# Global singletons to avoid reloading on every request
_tokenizer = None
_model = None


def _pick_device() -> str:
    if torch.cuda.is_available():
        return "cuda"
    if (
        hasattr(torch.backends, "mps")
        and torch.backends.mps.is_available()
        and torch.backends.mps.is_built()
    ):
        return "mps"
    return "cpu"


def load_model() -> Tuple[AutoTokenizer, torch.nn.Module]:
    """
    Load the instruction-tuned causal LM named in settings.
    Kept in module globals so it is only loaded once per process.
    """
    global _tokenizer, _model

    device = _pick_device()
    TRANSFORMERS_CACHE.mkdir(parents=True, exist_ok=True)
    cache_dir = str(TRANSFORMERS_CACHE)
    log.info("loading filter model %s on %s", NLFILTER_MODEL_ID, device)

    tok = AutoTokenizer.from_pretrained(NLFILTER_MODEL_ID, use_fast=True, cache_dir=cache_dir)
    # Ensure a pad token exists for generation
    if tok.pad_token_id is None:
        tok.pad_token = tok.eos_token or tok.unk_token or "</s>"

    model = AutoModelForCausalLM.from_pretrained(
        NLFILTER_MODEL_ID,
        cache_dir=cache_dir,
        torch_dtype=torch.float32 if device == "cpu" else torch.float16,
        low_cpu_mem_usage=True,
    )
    model.to(device)
    model.eval()

    _tokenizer, _model = tok, model
    return _tokenizer, _model


def is_loaded() -> bool:
    return _tokenizer is not None and _model is not None


def generate(system: str, user: str, max_new_tokens: int | None = None) -> str:
    """
    Greedy chat completion: a system instruction plus one user turn.
    Loads the model on first call. Returns only the newly generated text.
    """
    if not is_loaded():
        load_model()

    tok, model = _tokenizer, _model
    device = next(model.parameters()).device

    if getattr(tok, "chat_template", None):
        prompt = tok.apply_chat_template(
            [{"role": "system", "content": system}, {"role": "user", "content": user}],
            tokenize=False,
            add_generation_prompt=True,
        )
    else:
        prompt = f"{system}\n\n{user}\n"

    enc = tok(prompt, return_tensors="pt", truncation=True).to(device)

    with torch.no_grad():
        out_ids = model.generate(
            **enc,
            max_new_tokens=max_new_tokens or NLFILTER_MAX_NEW_TOKENS,
            do_sample=False,     # deterministic output for the same question
            num_beams=1,
            eos_token_id=tok.eos_token_id or tok.pad_token_id,
            pad_token_id=tok.pad_token_id or tok.eos_token_id,
        )

    # Causal models echo the prompt; strip it
    prompt_len = enc["input_ids"].shape[-1]
    return tok.decode(out_ids[0][prompt_len:], skip_special_tokens=True).strip()
