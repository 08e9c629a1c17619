# tools/core/assertion_evaluator.py

import asyncio
import json
import time
from typing import Any, Dict, Optional

from py_mini_racer import JSTimeoutException, MiniRacer

from core.base_tool import BaseTool
from common.logger import LoggerFactory, LogLevel
from schemas.tools.assertion_evaluator import (
    AssertionEvaluatorInput,
    AssertionEvaluatorOutput,
)

DEFAULT_SCRIPT_TIMEOUT = 10.0

NO_SCRIPT_MESSAGE = "No assertion script"
ALL_PASSED_MESSAGE = "All assertions passed"

# Evaluated once per isolate. Only the names bound here are visible to the
# user script; the isolate itself has no require, process, fs or network.
_SANDBOX_TEMPLATE = r"""
(function () {
  delete globalThis.WebAssembly;
  globalThis.eval = function () {
    throw new EvalError('eval is not available in assertion scripts');
  };

  var __logs = [];
  var __format = function (args) {
    return Array.prototype.map.call(args, function (value) {
      if (typeof value === 'string') { return value; }
      try { return JSON.stringify(value); } catch (e) { return String(value); }
    }).join(' ');
  };
  var __deepFreeze = function (value) {
    if (value !== null && typeof value === 'object' && !Object.isFrozen(value)) {
      Object.freeze(value);
      Object.getOwnPropertyNames(value).forEach(function (name) {
        __deepFreeze(value[name]);
      });
    }
    return value;
  };
  var __sink = function (level) {
    return function () { __logs.push([level, __format(arguments)]); };
  };
  var __ctx = __deepFreeze(JSON.parse(__CONTEXT__));

  const assert = Object.freeze({
    equal: function (actual, expected, message) {
      if (actual !== expected) {
        throw new Error(message || 'Expected ' + expected + ', but got ' + actual);
      }
    },
    deepEqual: function (actual, expected, message) {
      if (JSON.stringify(actual) !== JSON.stringify(expected)) {
        throw new Error(message || 'Objects are not deeply equal');
      }
    },
    ok: function (value, message) {
      if (!value) {
        throw new Error(message || 'Assertion failed');
      }
    },
    notEqual: function (actual, expected, message) {
      if (actual === expected) {
        throw new Error(message || 'Expected not ' + expected + ', but got ' + actual);
      }
    }
  });
  const status = __ctx.status;
  const body = __ctx.body;
  const header = __ctx.header;
  const params = __ctx.params;
  const records = __ctx.records;
  const log = __sink('info');
  const console = Object.freeze({
    log: __sink('info'),
    info: __sink('info'),
    debug: __sink('debug'),
    warn: __sink('warning'),
    error: __sink('error')
  });

  var __result;
  try {
    (function () {
__SCRIPT__
    })();
    __result = { passed: true, message: 'All assertions passed', errors: [] };
  } catch (error) {
    var text = (error !== null && typeof error === 'object' && 'message' in error)
      ? String(error.message) : String(error);
    __result = { passed: false, message: text, errors: [text] };
  }
  __result.logs = __logs;
  return JSON.stringify(__result);
})()
"""

_LOG_LEVELS = {
    "debug": LogLevel.DEBUG,
    "info": LogLevel.INFO,
    "warning": LogLevel.WARNING,
    "error": LogLevel.ERROR,
}


def build_sandbox_source(script: str, context: Dict[str, Any]) -> str:
    """Embed the user script and its JSON context into the sandbox wrapper."""
    payload = json.dumps(json.dumps(context, default=str, ensure_ascii=False))
    head, rest = _SANDBOX_TEMPLATE.split("__CONTEXT__", 1)
    middle, tail = rest.split("__SCRIPT__", 1)
    return head + payload + middle + script + tail


class AssertionEvaluatorTool(BaseTool):
    """
    Runs user-authored JavaScript assertions in a fresh V8 isolate.

    The script sees ``assert``, ``status``, ``body``, ``header``, ``params``,
    ``records``, ``log`` and ``console``; all data bindings are deep-frozen
    copies. ``log``/``console`` output is forwarded to the host logger after
    evaluation. A thrown error, a syntax error or a timeout all yield
    ``passed=False``; nothing is raised to the caller.
    """

    def __init__(
        self,
        *,
        name: str = "assertion_evaluator",
        description: str = "Sandboxed JavaScript assertion evaluator",
        config: Optional[Dict[str, Any]] = None,
        verbose: bool = False,
    ):
        super().__init__(
            name=name,
            description=description,
            input_schema=AssertionEvaluatorInput,
            output_schema=AssertionEvaluatorOutput,
            config=config,
            verbose=verbose,
        )
        cfg = config or {}
        self.timeout_seconds = float(cfg.get("timeout", DEFAULT_SCRIPT_TIMEOUT))
        self.max_memory = cfg.get("max_memory")
        self.script_logger = LoggerFactory.get_logger(
            name="sandbox.assertion",
            level=LogLevel.DEBUG if verbose else LogLevel.INFO,
        )

    async def _execute(self, inp: AssertionEvaluatorInput) -> AssertionEvaluatorOutput:
        start = time.perf_counter()

        if not inp.script or not inp.script.strip():
            passed = inp.status is not None and 200 <= inp.status < 300
            return AssertionEvaluatorOutput(
                passed=passed,
                message=NO_SCRIPT_MESSAGE,
                errors=[],
                execution_time=time.perf_counter() - start,
            )

        timeout = inp.timeout or self.timeout_seconds
        context = {
            "status": inp.status,
            "body": inp.body,
            "header": inp.headers,
            "params": inp.params,
            "records": inp.records,
        }

        try:
            source = build_sandbox_source(inp.script, context)
            raw = await asyncio.wait_for(
                asyncio.to_thread(self._run_isolate, source, timeout),
                timeout=timeout + 5,
            )
            outcome = json.loads(raw)
        except (JSTimeoutException, asyncio.TimeoutError):
            message = f"Assertion script execution failed: script timed out after {timeout:g}s"
            self.logger.error(message, script=inp.script[:100])
            return self._failure(message, f"script timed out after {timeout:g}s", start)
        except Exception as e:
            self.logger.error(
                f"Assertion script execution error: {e}", script=inp.script[:100]
            )
            return self._failure(f"Assertion script execution failed: {e}", str(e), start)

        logs = self._forward_logs(outcome.get("logs") or [])
        return AssertionEvaluatorOutput(
            passed=bool(outcome.get("passed")),
            message=outcome.get("message") or "Assertion completed",
            errors=[str(e) for e in outcome.get("errors") or []],
            logs=logs,
            execution_time=time.perf_counter() - start,
        )

    def _run_isolate(self, source: str, timeout: float) -> str:
        ctx = MiniRacer()
        try:
            if self.max_memory:
                return ctx.eval(source, timeout_sec=timeout, max_memory=int(self.max_memory))
            return ctx.eval(source, timeout_sec=timeout)
        finally:
            ctx.close()

    def _forward_logs(self, entries: Any) -> list:
        lines = []
        for entry in entries:
            if isinstance(entry, list) and len(entry) == 2:
                level, text = entry
            else:
                level, text = "info", entry
            self.script_logger.log(
                _LOG_LEVELS.get(level, LogLevel.INFO), str(text), test_assertion=True
            )
            lines.append(str(text))
        return lines

    @staticmethod
    def _failure(message: str, detail: str, start: float) -> AssertionEvaluatorOutput:
        return AssertionEvaluatorOutput(
            passed=False,
            message=message,
            errors=[detail],
            execution_time=time.perf_counter() - start,
        )
