"""
Services Module - dispatch logic between the HTTP layer and the store.

- dispatcher: IntentDispatcher, the intent → outcome state machine
- authorization: AuthorizationGate for security-sensitive classes
- command_applier: DeviceCommandApplier, one write per address
- dispatch_result: DispatchOutcome
- instruction_service: extraction + dispatch for one raw instruction
"""
